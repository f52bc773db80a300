"""
Reward Economy - Gacha
======================
Hero summoning with pity, the ten-pull guarantee and a daily free summon.

GachaState is an immutable value: every summon returns a new state and
leaves the old one untouched. The service itself holds only injected
collaborators (catalog, random source, config, clock).

Draw order for one summon:
1. rarity roll (skipped when pity forces epic)
2. uniform pick among catalog templates of that rarity

A ten-pull rolls all ten rarities first, then picks ten templates.

Free summon:
- available once per UTC calendar day, compared on the date part of the
  stored ISO timestamp
- GachaConfig.debug_free_summon_always_available bypasses the gate
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .catalog import HeroCatalog, HeroTemplate
from .constants import (
    COST_SINGLE_SUMMON,
    COST_TEN_SUMMON,
    GACHA_RATES,
    PITY_THRESHOLD,
    TEN_SUMMON_COUNT,
    HeroRarity,
)
from .errors import FailureReason
from .rarity import roll_ten_with_guarantee, roll_with_pity
from .sources import RandomSource

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _utc_date(timestamp: str) -> date:
    """Calendar date (UTC) of an ISO-8601 timestamp. Accepts a trailing 'Z'."""
    if timestamp.endswith("Z"):
        timestamp = timestamp[:-1] + "+00:00"
    parsed = datetime.fromisoformat(timestamp)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


# =============================================================================
# STATE & CONFIG
# =============================================================================

@dataclass(frozen=True)
class GachaState:
    """Per-player summon progress."""
    summon_count: int = 0
    last_free_summon_date: Optional[str] = None  # ISO timestamp of the last free summon
    pity_summons: int = 0                        # summons since the last epic+

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summon_count': self.summon_count,
            'last_free_summon_date': self.last_free_summon_date,
            'pity_summons': self.pity_summons,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GachaState':
        return cls(
            summon_count=data.get('summon_count', 0),
            last_free_summon_date=data.get('last_free_summon_date'),
            pity_summons=data.get('pity_summons', 0),
        )


@dataclass(frozen=True)
class GachaConfig:
    """Summon rates and prices."""
    rates: Dict[HeroRarity, float] = field(default_factory=lambda: dict(GACHA_RATES))
    pity_threshold: int = PITY_THRESHOLD
    cost_single: int = COST_SINGLE_SUMMON
    cost_ten: int = COST_TEN_SUMMON
    ten_count: int = TEN_SUMMON_COUNT
    debug_free_summon_always_available: bool = False


@dataclass(frozen=True)
class PityInfo:
    """Pity progress for display."""
    current: int
    threshold: int

    @property
    def remaining(self) -> int:
        return max(0, self.threshold - self.current)

    @property
    def percentage(self) -> float:
        return min(100.0, self.current / self.threshold * 100)

    @property
    def is_guaranteed(self) -> bool:
        """The next summon is forced to epic."""
        return self.current >= self.threshold


@dataclass(frozen=True)
class SummonPurchase:
    """Outcome of a paid or free summon request."""
    success: bool
    state: GachaState
    new_gold: int
    heroes: Tuple[HeroTemplate, ...] = ()
    gold_spent: int = 0
    reason: Optional[FailureReason] = None

    @property
    def message(self) -> str:
        if self.reason is not None:
            return self.reason.message
        names = ", ".join(h.name for h in self.heroes)
        return f"Summoned: {names}"


# =============================================================================
# SERVICE
# =============================================================================

class GachaService:
    """Summons heroes from a catalog."""

    def __init__(
        self,
        catalog: HeroCatalog,
        rng: RandomSource,
        config: Optional[GachaConfig] = None,
        clock: Clock = utc_now,
    ):
        self.catalog = catalog
        self.rng = rng
        self.config = config or GachaConfig()
        self.clock = clock

    def _advance(self, state: GachaState, count: int, pity: int, is_free: bool) -> GachaState:
        changes: Dict[str, Any] = {
            'summon_count': state.summon_count + count,
            'pity_summons': pity,
        }
        if is_free:
            changes['last_free_summon_date'] = self.clock().astimezone(timezone.utc).isoformat()
        return replace(state, **changes)

    def summon(self, state: GachaState, is_free: bool = False) -> Tuple[HeroTemplate, GachaState]:
        """
        Summon one hero.

        Returns:
            (template, new_state)

        Raises ConfigurationError if the catalog has no hero of the rolled rarity.
        """
        rarity, pity, forced = roll_with_pity(
            self.config.rates, state.pity_summons, self.rng,
            threshold=self.config.pity_threshold,
        )
        template = self.catalog.pick(rarity, self.rng)
        new_state = self._advance(state, 1, pity, is_free)
        logger.info("summoned %s (%s%s), pity %d -> %d",
                    template.name, rarity.value, ", pity" if forced else "",
                    state.pity_summons, pity)
        return template, new_state

    def summon_ten(self, state: GachaState) -> Tuple[List[HeroTemplate], GachaState]:
        """
        Summon ten heroes; at least one is rare or better.

        Returns:
            (templates in summon order, new_state)
        """
        rarities, pity = roll_ten_with_guarantee(
            self.config.rates, state.pity_summons, self.rng,
            threshold=self.config.pity_threshold,
            count=self.config.ten_count,
        )
        templates = [self.catalog.pick(rarity, self.rng) for rarity in rarities]
        new_state = self._advance(state, len(templates), pity, is_free=False)
        logger.info("ten-pull: %s, pity %d -> %d",
                    ", ".join(r.value for r in rarities), state.pity_summons, pity)
        return templates, new_state

    # -------------------------------------------------------------------------
    # Gates
    # -------------------------------------------------------------------------

    def can_use_free_summon(self, state: GachaState) -> bool:
        """True if no free summon was used on the current UTC day."""
        if self.config.debug_free_summon_always_available:
            return True
        if not state.last_free_summon_date:
            return True
        today = self.clock().astimezone(timezone.utc).date()
        return _utc_date(state.last_free_summon_date) != today

    def can_afford_single(self, gold: int) -> bool:
        return gold >= self.config.cost_single

    def can_afford_ten(self, gold: int) -> bool:
        return gold >= self.config.cost_ten

    def pity_info(self, state: GachaState) -> PityInfo:
        return PityInfo(current=state.pity_summons, threshold=self.config.pity_threshold)

    # -------------------------------------------------------------------------
    # Purchases
    # -------------------------------------------------------------------------

    def free_summon(self, state: GachaState, gold: int) -> SummonPurchase:
        """Use today's free summon. Gold is passed through unchanged."""
        if not self.can_use_free_summon(state):
            return SummonPurchase(success=False, state=state, new_gold=gold,
                                  reason=FailureReason.FREE_SUMMON_UNAVAILABLE)
        template, new_state = self.summon(state, is_free=True)
        return SummonPurchase(success=True, state=new_state, new_gold=gold, heroes=(template,))

    def purchase_summon(self, state: GachaState, gold: int) -> SummonPurchase:
        """Pay for one summon."""
        cost = self.config.cost_single
        if not self.can_afford_single(gold):
            return SummonPurchase(success=False, state=state, new_gold=gold,
                                  reason=FailureReason.INSUFFICIENT_FUNDS)
        template, new_state = self.summon(state)
        return SummonPurchase(success=True, state=new_state, new_gold=gold - cost,
                              heroes=(template,), gold_spent=cost)

    def purchase_ten(self, state: GachaState, gold: int) -> SummonPurchase:
        """Pay for a ten-pull."""
        cost = self.config.cost_ten
        if not self.can_afford_ten(gold):
            return SummonPurchase(success=False, state=state, new_gold=gold,
                                  reason=FailureReason.INSUFFICIENT_FUNDS)
        templates, new_state = self.summon_ten(state)
        return SummonPurchase(success=True, state=new_state, new_gold=gold - cost,
                              heroes=tuple(templates), gold_spent=cost)
