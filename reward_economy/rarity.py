"""
Reward Economy - Rarity Roller
==============================
Weighted rarity selection shared by the gacha and the loot tables.

Rates are percentages. A single draw ``r = rng.random() * 100`` is compared
against cumulative boundaries built from the rarest tier down to the most
common one (reverse enum declaration order), so with
``{common 60, rare 25, epic 12, legendary 3}`` the boundaries are
legendary 3, epic 15, rare 40, common 100.

Pity:
- Once ``pity_summons >= PITY_THRESHOLD`` the next hero is forced to epic
  without drawing
- Resolving to epic or legendary resets the counter, anything else adds 1
- Legendary is never forced

Ten-pull guarantee:
- Nine pity-aware rolls, then the 10th is restricted to rare or better
  when the first nine were all common
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .constants import (
    HeroRarity,
    ItemRarity,
    PITY_RARITY,
    PITY_THRESHOLD,
    TEN_SUMMON_COUNT,
    TEN_SUMMON_GUARANTEE,
)
from .errors import ConfigurationError
from .sources import RandomSource

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Enum)


# Hidden-path upgrade map. Anything not listed stays where it is.
RARITY_BUMPS: Dict[ItemRarity, ItemRarity] = {
    ItemRarity.RARE: ItemRarity.EPIC,
    ItemRarity.EPIC: ItemRarity.LEGENDARY,
}


# =============================================================================
# BASIC ROLL
# =============================================================================

def _scan_order(table: Dict[R, float]) -> List[R]:
    """Rarities present in the table, rarest first."""
    enum_cls = type(next(iter(table)))
    return [rarity for rarity in reversed(list(enum_cls)) if rarity in table]


def _most_common(table: Dict[R, float]) -> R:
    enum_cls = type(next(iter(table)))
    for rarity in enum_cls:
        if rarity in table:
            return rarity
    raise ConfigurationError("empty rarity table")  # pragma: no cover


def normalize_rates(rates: Dict[R, float], allowed: Iterable[R]) -> Dict[R, float]:
    """
    Restrict a rate table to ``allowed`` and rescale it to sum to 100.

    Raises ConfigurationError when the allowed rarities carry no weight.
    """
    table = {rarity: rates.get(rarity, 0.0) for rarity in allowed}
    total = sum(table.values())
    if total <= 0:
        names = ", ".join(r.value for r in table)
        raise ConfigurationError(f"no positive rate among allowed rarities: {names}")
    return {rarity: rate / total * 100 for rarity, rate in table.items()}


def roll_rarity(
    rates: Dict[R, float],
    rng: RandomSource,
    allowed: Optional[Sequence[R]] = None,
) -> R:
    """
    Pick one rarity from a percentage table with a single draw.

    Args:
        rates: rarity -> percent
        rng: injected random source
        allowed: optional subset; the table is renormalised over it

    Returns the first rarity (rarest first) whose cumulative boundary is
    strictly above the draw. If float drift leaves the draw past the last
    boundary, falls back to the first allowed rarity, or the most common
    rarity in the table.
    """
    if not rates:
        raise ConfigurationError("rarity table is empty")

    if allowed is not None:
        allowed = list(allowed)
        if not allowed:
            raise ConfigurationError("allowed rarity set is empty")
        table = normalize_rates(rates, allowed)
    else:
        if sum(rates.values()) <= 0:
            raise ConfigurationError("rarity table has no positive rate")
        table = dict(rates)

    r = rng.random() * 100
    cumulative = 0.0
    for rarity in _scan_order(table):
        cumulative += table[rarity]
        if r < cumulative:
            logger.debug("rolled %s (r=%.3f)", rarity.value, r)
            return rarity

    fallback = allowed[0] if allowed else _most_common(table)
    logger.debug("rarity roll fell through (r=%.3f), using %s", r, fallback.value)
    return fallback


# =============================================================================
# PITY
# =============================================================================

def next_pity(rarity: HeroRarity, pity_summons: int) -> int:
    """Pity counter after a summon resolves to ``rarity``."""
    if rarity.is_epic_or_better:
        return 0
    return pity_summons + 1


def roll_with_pity(
    rates: Dict[HeroRarity, float],
    pity_summons: int,
    rng: RandomSource,
    allowed: Optional[Sequence[HeroRarity]] = None,
    threshold: int = PITY_THRESHOLD,
) -> Tuple[HeroRarity, int, bool]:
    """
    Roll a hero rarity, honouring the pity counter.

    Returns:
        (rarity, new_pity_summons, was_forced)
    """
    if pity_summons >= threshold:
        logger.debug("pity reached (%d >= %d), forcing %s",
                     pity_summons, threshold, PITY_RARITY.value)
        return PITY_RARITY, next_pity(PITY_RARITY, pity_summons), True

    rarity = roll_rarity(rates, rng, allowed)
    return rarity, next_pity(rarity, pity_summons), False


def roll_ten_with_guarantee(
    rates: Dict[HeroRarity, float],
    pity_summons: int,
    rng: RandomSource,
    threshold: int = PITY_THRESHOLD,
    count: int = TEN_SUMMON_COUNT,
    guarantee: Sequence[HeroRarity] = TEN_SUMMON_GUARANTEE,
) -> Tuple[List[HeroRarity], int]:
    """
    Roll a multi-summon where the last slot is guaranteed rare or better.

    Pity state is threaded through every roll, including the guaranteed one.

    Returns:
        (rarities in summon order, new_pity_summons)
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")

    rarities: List[HeroRarity] = []
    pity = pity_summons
    for _ in range(count - 1):
        rarity, pity, _forced = roll_with_pity(rates, pity, rng, threshold=threshold)
        rarities.append(rarity)

    allowed = None
    if not any(r in guarantee for r in rarities):
        allowed = list(guarantee)
        logger.debug("no rare+ in first %d rolls, restricting final roll", count - 1)

    rarity, pity, _forced = roll_with_pity(rates, pity, rng, allowed, threshold=threshold)
    rarities.append(rarity)
    return rarities, pity


# =============================================================================
# HELPERS
# =============================================================================

def bump_rarity(rarity: ItemRarity) -> ItemRarity:
    """Raise an item rarity one step (rare -> epic -> legendary)."""
    return RARITY_BUMPS.get(rarity, rarity)


def count_by_rarity(rarities: Iterable[R]) -> Dict[R, int]:
    """Tally how often each rarity appears."""
    counts: Dict[R, int] = {}
    for rarity in rarities:
        counts[rarity] = counts.get(rarity, 0) + 1
    return counts
