"""
Reward Economy - Summon Analysis
================================
Closed-form pity expectations and Monte Carlo checks of the gacha.

Expected summons to an epic-or-better hero use the truncated geometric
distribution: with per-summon chance p and a forced epic on summon
``threshold + 1``,

    E[X] = (1 - (1 - p) ** (threshold + 1)) / p

With the default table p = 0.15 and threshold 100, so E[X] ~= 6.67 and the
pity floor almost never fires ((0.85) ** 100 ~= 8.7e-8).

Run as a script for a report:
    reward-economy-report --sessions 20000 --seed 7
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .catalog import HeroCatalog, default_catalog
from .constants import GACHA_RATES, PITY_THRESHOLD, HeroRarity
from .gacha import GachaConfig, GachaService, GachaState
from .rarity import roll_with_pity
from .sources import RandomSource, SeededRandom

logger = logging.getLogger(__name__)


# =============================================================================
# CLOSED FORM
# =============================================================================

def epic_or_better_chance(rates: Optional[Dict[HeroRarity, float]] = None) -> float:
    """Per-summon probability of epic or legendary (as a decimal)."""
    rates = GACHA_RATES if rates is None else rates
    total = sum(rates.values())
    hits = sum(rate for rarity, rate in rates.items() if rarity.is_epic_or_better)
    return hits / total if total > 0 else 0.0


def expected_pulls_with_pity(p: float, cap: int) -> float:
    """
    Exact E[min(geometric_roll, cap)].

    - p = success probability per pull
    - cap = pull on which success is guaranteed
    """
    if p <= 0:
        return float(cap)
    if p >= 1:
        return 1.0

    q = 1 - p
    return (1 - q**cap) / p


def expected_summons_to_epic(
    rates: Optional[Dict[HeroRarity, float]] = None,
    threshold: int = PITY_THRESHOLD,
) -> float:
    """Expected single summons from pity 0 until an epic-or-better hero."""
    return expected_pulls_with_pity(epic_or_better_chance(rates), threshold + 1)


def pity_trigger_probability(
    rates: Optional[Dict[HeroRarity, float]] = None,
    threshold: int = PITY_THRESHOLD,
) -> float:
    """Chance that pity has to force the epic (threshold misses in a row)."""
    return (1 - epic_or_better_chance(rates)) ** threshold


# =============================================================================
# MONTE CARLO
# =============================================================================

@dataclass
class SummonReport:
    """Aggregated pulls-to-epic statistics over many sessions."""
    sessions: int
    mean: float
    median: float
    p90: float
    p99: float
    worst: int
    pity_triggers: int
    expected: float
    rarity_frequencies: Dict[HeroRarity, float]


def simulate_pulls_to_epic(
    rng: RandomSource,
    sessions: int,
    rates: Optional[Dict[HeroRarity, float]] = None,
    threshold: int = PITY_THRESHOLD,
) -> np.ndarray:
    """
    Pulls needed to reach epic-or-better, once per session, from pity 0.

    Returns an int array of length ``sessions``.
    """
    if sessions <= 0:
        raise ValueError(f"sessions must be positive, got {sessions}")
    rates = GACHA_RATES if rates is None else rates

    results = np.empty(sessions, dtype=np.int64)
    for i in range(sessions):
        pity = 0
        pulls = 0
        while True:
            pulls += 1
            rarity, pity, _forced = roll_with_pity(rates, pity, rng, threshold=threshold)
            if rarity.is_epic_or_better:
                break
        results[i] = pulls
    return results


def simulate_ten_pull_rarities(
    service: GachaService,
    pulls: int,
) -> Dict[HeroRarity, float]:
    """Share of each rarity over ``pulls`` ten-pulls."""
    counts = np.zeros(len(HeroRarity), dtype=np.int64)
    index = {rarity: i for i, rarity in enumerate(HeroRarity)}
    state = GachaState()
    for _ in range(pulls):
        templates, state = service.summon_ten(state)
        for template in templates:
            counts[index[template.rarity]] += 1
    total = counts.sum()
    return {rarity: float(counts[i] / total) if total else 0.0 for rarity, i in index.items()}


def build_report(
    sessions: int = 10000,
    seed: int = 0,
    catalog: Optional[HeroCatalog] = None,
    threshold: int = PITY_THRESHOLD,
) -> SummonReport:
    """Simulate single-summon sessions and ten-pulls from one seed."""
    rng = SeededRandom(seed)
    pulls = simulate_pulls_to_epic(rng, sessions, threshold=threshold)

    service = GachaService(catalog or default_catalog(), rng,
                           GachaConfig(pity_threshold=threshold))
    frequencies = simulate_ten_pull_rarities(service, max(1, sessions // 10))

    report = SummonReport(
        sessions=sessions,
        mean=float(np.mean(pulls)),
        median=float(np.median(pulls)),
        p90=float(np.percentile(pulls, 90)),
        p99=float(np.percentile(pulls, 99)),
        worst=int(np.max(pulls)),
        pity_triggers=int(np.sum(pulls > threshold)),
        expected=expected_summons_to_epic(threshold=threshold),
        rarity_frequencies=frequencies,
    )
    logger.debug("report built: %s", report)
    return report


def format_report(report: SummonReport) -> str:
    lines = [
        "=" * 60,
        "SUMMON ANALYSIS",
        "=" * 60,
        f"Sessions simulated:        {report.sessions}",
        f"Expected pulls to epic+:   {report.expected:.2f}",
        f"Simulated mean:            {report.mean:.2f}",
        f"Median / p90 / p99:        {report.median:.0f} / {report.p90:.0f} / {report.p99:.0f}",
        f"Worst session:             {report.worst}",
        f"Pity triggers:             {report.pity_triggers}",
        "",
        "Ten-pull rarity mix:",
    ]
    for rarity, share in report.rarity_frequencies.items():
        lines.append(f"  {rarity.value:<10} {share * 100:6.2f}%")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Monte Carlo report for the hero gacha")
    parser.add_argument("--sessions", type=int, default=10000,
                        help="single-summon sessions to simulate")
    parser.add_argument("--seed", type=int, default=0, help="random seed")
    parser.add_argument("--pity", type=int, default=PITY_THRESHOLD, help="pity threshold")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.sessions <= 0:
        parser.error("--sessions must be positive")

    report = build_report(sessions=args.sessions, seed=args.seed, threshold=args.pity)
    print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
