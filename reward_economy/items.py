"""
Reward Economy - Items
======================
Item instances and the stat generator that produces them.

Generation (one call to ``generate_item``):
1. slot: the given slot, or one uniform draw over ItemSlot
2. base stat: floor(3 * level ** 1.2 * rarity_multiplier)
3. per-stat: floor(base * slot_weight); crit = round(base * weight * 0.1, 2)
4. name: "<prefix> <noun>" (common items get no prefix)
5. gold value: floor(rarity_base * level / 5 * (1 + 0.2 * enchant))

Gold value is fixed at creation. Enchanting changes effective stats, not
the stored value.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import (
    ENCHANT_STAT_BONUS,
    ENCHANT_VALUE_BONUS,
    ITEM_BASE_VALUES,
    ITEM_CRIT_SCALE,
    ITEM_LEVEL_EXPONENT,
    ITEM_NAME_PREFIXES,
    ITEM_RARITY_MULTIPLIERS,
    ITEM_SCORE_BASE,
    ITEM_SCORE_ENCHANT_BONUS,
    ITEM_SCORE_LEVEL_DIVISOR,
    ITEM_SCORE_SLOT_MULTIPLIERS,
    ITEM_STAT_BASE,
    ITEM_VALUE_LEVEL_DIVISOR,
    MAX_ENCHANT_LEVEL,
    SLOT_DESCRIPTIONS,
    SLOT_ICONS,
    SLOT_NOUNS,
    SLOT_STAT_WEIGHTS,
    ItemRarity,
    ItemSlot,
    get_rarity_color,
    get_rarity_display_name,
)
from .sources import IdProvider, RandomSource, choice, uuid_provider
from .stats import StatBlock

logger = logging.getLogger(__name__)


@dataclass
class ItemInstance:
    """A generated piece of equipment. Mutable: enchanting raises enchant_level."""
    id: str
    name: str
    rarity: ItemRarity
    level: int
    slot: ItemSlot
    stats: StatBlock
    gold_value: int
    enchant_level: int = 0
    description: str = ""
    icon: str = ""

    @property
    def max_enchant_level(self) -> int:
        return MAX_ENCHANT_LEVEL

    @property
    def is_max_enchant(self) -> bool:
        return self.enchant_level >= MAX_ENCHANT_LEVEL

    @property
    def display_name(self) -> str:
        """Name with the enchant suffix, e.g. 'Fine Helm +3'."""
        if self.enchant_level > 0:
            return f"{self.name} +{self.enchant_level}"
        return self.name

    @property
    def rarity_color(self) -> str:
        return get_rarity_color(self.rarity)

    @property
    def rarity_display_name(self) -> str:
        return get_rarity_display_name(self.rarity)

    def effective_stats(self) -> StatBlock:
        return get_effective_stats(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'rarity': self.rarity.value,
            'level': self.level,
            'slot': self.slot.value,
            'stats': self.stats.to_dict(),
            'gold_value': self.gold_value,
            'enchant_level': self.enchant_level,
            'description': self.description,
            'icon': self.icon,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ItemInstance':
        """Create ItemInstance from dictionary."""
        rarity = ItemRarity(data['rarity'])
        slot = ItemSlot(data['slot'])
        level = data.get('level', 1)
        enchant = data.get('enchant_level', 0)
        gold_value = data.get('gold_value')
        if gold_value is None:
            gold_value = calculate_item_value(rarity, level, enchant)
        return cls(
            id=data['id'],
            name=data['name'],
            rarity=rarity,
            level=level,
            slot=slot,
            stats=StatBlock.from_dict(data.get('stats', {})),
            gold_value=gold_value,
            enchant_level=enchant,
            description=data.get('description', SLOT_DESCRIPTIONS[slot]),
            icon=data.get('icon', SLOT_ICONS[slot]),
        )


# =============================================================================
# FORMULAS
# =============================================================================

def calculate_base_stat(level: int, rarity: ItemRarity) -> int:
    """floor(3 * level^1.2 * rarity_multiplier)."""
    multiplier = ITEM_RARITY_MULTIPLIERS.get(rarity, 1.0)
    return math.floor(ITEM_STAT_BASE * level ** ITEM_LEVEL_EXPONENT * multiplier)


def generate_stats_for_slot(slot: ItemSlot, base_stat: float) -> StatBlock:
    """Spread a base stat over the slot's weights."""
    hp_w, atk_w, def_w, spd_w, crit_w = SLOT_STAT_WEIGHTS[slot]
    return StatBlock(
        hp=math.floor(base_stat * hp_w),
        atk=math.floor(base_stat * atk_w),
        defense=math.floor(base_stat * def_w),
        spd=math.floor(base_stat * spd_w),
        crit=round(base_stat * crit_w * ITEM_CRIT_SCALE, 2),
    )


def calculate_item_value(rarity: ItemRarity, level: int, enchant_level: int = 0) -> int:
    """Gold value: floor(base * level / 5 * (1 + 0.2 * enchant))."""
    value = ITEM_BASE_VALUES.get(rarity, ITEM_BASE_VALUES[ItemRarity.COMMON])
    value = value * (level / ITEM_VALUE_LEVEL_DIVISOR)
    if enchant_level > 0:
        value *= 1 + enchant_level * ENCHANT_VALUE_BONUS
    return math.floor(value)


def get_effective_stats(item: ItemInstance) -> StatBlock:
    """Stats after enchantment: +10% per enchant level (flat stats floored)."""
    multiplier = 1 + item.enchant_level * ENCHANT_STAT_BONUS
    stats = item.stats
    return StatBlock(
        hp=math.floor(stats.hp * multiplier),
        atk=math.floor(stats.atk * multiplier),
        defense=math.floor(stats.defense * multiplier),
        spd=math.floor(stats.spd * multiplier),
        crit=round(stats.crit * multiplier, 2),
    )


def calculate_item_score(item: ItemInstance) -> int:
    """Rough power rating used for sorting and auto-equip comparisons."""
    base = ITEM_SCORE_BASE.get(item.rarity, ITEM_SCORE_BASE[ItemRarity.COMMON])
    level_scaling = 1 + item.level / ITEM_SCORE_LEVEL_DIVISOR
    enchant_bonus = 1 + item.enchant_level * ITEM_SCORE_ENCHANT_BONUS
    slot_mult = ITEM_SCORE_SLOT_MULTIPLIERS.get(item.slot, 1.0)
    return math.floor(base * level_scaling * enchant_bonus * slot_mult)


def compare_items(item: ItemInstance, other: Optional[ItemInstance]) -> Optional[StatBlock]:
    """Effective-stat difference ``item - other``. None when there is nothing to compare."""
    if other is None:
        return None
    mine = item.effective_stats()
    theirs = other.effective_stats()
    return StatBlock(
        hp=mine.hp - theirs.hp,
        atk=mine.atk - theirs.atk,
        defense=mine.defense - theirs.defense,
        spd=mine.spd - theirs.spd,
        crit=round(mine.crit - theirs.crit, 2),
    )


# =============================================================================
# GENERATION
# =============================================================================

def generate_name(rarity: ItemRarity, slot: ItemSlot, rng: RandomSource) -> str:
    """Random display name. Draws once for the prefix (non-common only), once for the noun."""
    prefixes = ITEM_NAME_PREFIXES.get(rarity, [])
    prefix = ""
    if rarity != ItemRarity.COMMON and prefixes:
        prefix = choice(rng, prefixes) + " "
    return prefix + choice(rng, SLOT_NOUNS[slot])


def generate_item(
    level: int,
    rarity: ItemRarity,
    rng: RandomSource,
    id_provider: IdProvider = uuid_provider,
    slot: Optional[ItemSlot] = None,
) -> ItemInstance:
    """Create a new item with rolled slot, stats and name."""
    if level < 1:
        raise ValueError(f"item level must be at least 1, got {level}")

    if slot is None:
        slot = choice(rng, list(ItemSlot))

    base_stat = calculate_base_stat(level, rarity)
    stats = generate_stats_for_slot(slot, base_stat)
    name = generate_name(rarity, slot, rng)

    item = ItemInstance(
        id=id_provider(),
        name=name,
        rarity=rarity,
        level=level,
        slot=slot,
        stats=stats,
        gold_value=calculate_item_value(rarity, level),
        description=SLOT_DESCRIPTIONS[slot],
        icon=SLOT_ICONS[slot],
    )
    logger.debug("generated %s %s lv%d (%s)", rarity.value, slot.value, level, name)
    return item
