"""
Reward Economy - Progression
============================
Experience, level-ups and compounding stat growth.

Formulas:
- required_xp(level) = floor(100 * level ** 1.5)
- on level-up, hp/atk/defense/spd grow multiplicatively and round up:
  HP +5%, ATK +3%, DEF +3%, SPD +2%
- crit grows by +0.5, rounded to one decimal

One XP grant can cross several levels; each level is applied in order and
carries the surplus XP forward.
"""

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from .constants import (
    HERO_SCORE_RARITY_MULTIPLIERS,
    HERO_SCORE_WEIGHTS,
    LEVEL_UP_CRIT_GAIN,
    LEVEL_UP_GROWTH,
    XP_BASE,
    XP_EXPONENT,
)
from .stats import StatBlock

if TYPE_CHECKING:
    from .heroes import HeroInstance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelUp:
    """One level gained. Stats are effective stats before and after."""
    hero_name: str
    from_level: int
    to_level: int
    old_stats: StatBlock
    new_stats: StatBlock

    @property
    def messages(self) -> List[str]:
        old, new = self.old_stats, self.new_stats
        return [
            f"{self.hero_name} leveled up! (Lv.{self.from_level} -> Lv.{self.to_level})",
            f"  HP: {old.hp} -> {new.hp} (+{new.hp - old.hp})",
            f"  ATK: {old.atk} -> {new.atk} (+{new.atk - old.atk})",
            f"  DEF: {old.defense} -> {new.defense} (+{new.defense - old.defense})",
            f"  SPD: {old.spd} -> {new.spd} (+{new.spd - old.spd})",
            f"  CRIT: {old.crit:.1f}% -> {new.crit:.1f}% (+{new.crit - old.crit:.1f}%)",
        ]


# =============================================================================
# FORMULAS
# =============================================================================

def calculate_required_xp(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""
    if level < 1:
        raise ValueError(f"level must be at least 1, got {level}")
    return math.floor(XP_BASE * level ** XP_EXPONENT)


def total_xp_for_levels(start_level: int, levels: int) -> int:
    """Summed XP to climb ``levels`` levels starting at ``start_level`` with 0 XP."""
    return sum(calculate_required_xp(level) for level in range(start_level, start_level + levels))


def grow_stats(stats: StatBlock) -> StatBlock:
    """Base stats after one level of growth."""
    return StatBlock(
        hp=math.ceil(stats.hp * (1 + LEVEL_UP_GROWTH['hp'])),
        atk=math.ceil(stats.atk * (1 + LEVEL_UP_GROWTH['atk'])),
        defense=math.ceil(stats.defense * (1 + LEVEL_UP_GROWTH['defense'])),
        spd=math.ceil(stats.spd * (1 + LEVEL_UP_GROWTH['spd'])),
        crit=round(stats.crit + LEVEL_UP_CRIT_GAIN, 1),
    )


def refresh_effective_stats(hero: "HeroInstance") -> None:
    """Recompute current_stats from base stats and the equipment collaborator."""
    if hero.equipment is not None:
        hero.equipment.recalc(hero)
    else:
        hero.current_stats = hero.base_stats
        hero.clamp_hp()


def apply_level_up_growth(hero: "HeroInstance") -> LevelUp:
    """
    Advance one level.

    Grows base stats, refreshes effective stats, recomputes required_xp and
    restores HP to the new maximum. Does not touch experience.
    """
    old_stats = hero.current_stats
    hero.level += 1
    hero.base_stats = grow_stats(hero.base_stats)
    refresh_effective_stats(hero)
    hero.required_xp = calculate_required_xp(hero.level)
    hero.restore_full_hp()
    return LevelUp(
        hero_name=hero.name,
        from_level=hero.level - 1,
        to_level=hero.level,
        old_stats=old_stats,
        new_stats=hero.current_stats,
    )


def gain_xp(hero: "HeroInstance", amount: int) -> List[LevelUp]:
    """
    Grant experience and apply every level-up it pays for.

    Returns the level-ups in order (empty if none). Non-positive grants are
    ignored.
    """
    if amount <= 0:
        if amount < 0:
            logger.warning("ignoring negative XP grant %s for %s", amount, hero.name)
        return []

    hero.experience += amount
    level_ups: List[LevelUp] = []

    while hero.experience >= hero.required_xp:
        hero.experience -= hero.required_xp
        level_ups.append(apply_level_up_growth(hero))
        logger.info("%s reached level %d", hero.name, hero.level)

    logger.debug("%s gained %d XP (%d/%d)", hero.name, amount,
                 hero.experience, hero.required_xp)
    return level_ups


def calculate_hero_score(hero: "HeroInstance") -> int:
    """Power score from effective stats, scaled by rarity."""
    stats = hero.current_stats
    raw = (
        stats.hp * HERO_SCORE_WEIGHTS['hp']
        + stats.atk * HERO_SCORE_WEIGHTS['atk']
        + stats.defense * HERO_SCORE_WEIGHTS['defense']
        + stats.spd * HERO_SCORE_WEIGHTS['spd']
        + stats.crit * HERO_SCORE_WEIGHTS['crit']
    )
    return math.floor(raw * HERO_SCORE_RARITY_MULTIPLIERS.get(hero.rarity, 1.0))
