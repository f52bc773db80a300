"""
Reward Economy - Loot
=====================
Gold and item rewards for combat, treasure chests and hidden paths.

Combat:
- gold = sum over enemies of floor(level * 10 * variance),
  variance uniform in [0.8, 1.2], drawn per enemy
- each enemy gets one drop trial (normal 30%, elite 50%, boss 100%)
- dropped item: combat rarity table, level = enemy level + randint(-1, 2),
  clamped to >= 1

Treasure chest:
- gold = floor(base[quality] * uniform(0.8, 1.2))
- 1/2/3/4 items for common/rare/epic/legendary chests
- item level = player level + randint(-1, 1), clamped to >= 1

Hidden path (rare, epic, legendary only):
- gold = floor(base[quality] * uniform(0.8, 1.2))
- 3/4/5 items at the path quality, each with a 20% chance to bump one tier
- item level = player level + randint(0, 4)

Draw order: all gold draws first, then items one at a time.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import (
    BASE_GOLD_PER_LEVEL,
    CHEST_BASE_GOLD,
    CHEST_ITEM_COUNTS,
    CHEST_LEVEL_OFFSETS,
    CHEST_RARITY_RATES,
    COMBAT_RARITY_RATES,
    DROP_CHANCES,
    GOLD_VARIANCE,
    HIDDEN_PATH_BASE_GOLD,
    HIDDEN_PATH_BUMP_CHANCE,
    HIDDEN_PATH_ITEM_COUNTS,
    HIDDEN_PATH_ITEM_RARITY,
    HIDDEN_PATH_LEVEL_OFFSETS,
    MAX_ITEM_LEVEL_OFFSET,
    MIN_ITEM_LEVEL_OFFSET,
    REWARD_GOLD_SPREAD,
    EnemyType,
    ItemRarity,
    LootQuality,
)
from .errors import ConfigurationError
from .items import ItemInstance, generate_item
from .rarity import bump_rarity, roll_rarity
from .sources import IdProvider, RandomSource, chance, randint, uniform, uuid_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LootConfig:
    """Loot tables. Defaults come from constants."""
    base_gold_per_level: int = BASE_GOLD_PER_LEVEL
    gold_variance: float = GOLD_VARIANCE
    drop_chances: Dict[EnemyType, float] = field(default_factory=lambda: dict(DROP_CHANCES))
    rarity_distribution: Dict[ItemRarity, float] = field(
        default_factory=lambda: dict(COMBAT_RARITY_RATES))
    min_item_level_offset: int = MIN_ITEM_LEVEL_OFFSET
    max_item_level_offset: int = MAX_ITEM_LEVEL_OFFSET

    reward_gold_spread: Tuple[float, float] = REWARD_GOLD_SPREAD

    chest_base_gold: Dict[LootQuality, int] = field(default_factory=lambda: dict(CHEST_BASE_GOLD))
    chest_item_counts: Dict[LootQuality, int] = field(
        default_factory=lambda: dict(CHEST_ITEM_COUNTS))
    chest_rarity_rates: Dict[LootQuality, Dict[ItemRarity, float]] = field(
        default_factory=lambda: {q: dict(t) for q, t in CHEST_RARITY_RATES.items()})
    chest_level_offsets: Tuple[int, int] = CHEST_LEVEL_OFFSETS

    hidden_path_base_gold: Dict[LootQuality, int] = field(
        default_factory=lambda: dict(HIDDEN_PATH_BASE_GOLD))
    hidden_path_item_counts: Dict[LootQuality, int] = field(
        default_factory=lambda: dict(HIDDEN_PATH_ITEM_COUNTS))
    hidden_path_item_rarity: Dict[LootQuality, ItemRarity] = field(
        default_factory=lambda: dict(HIDDEN_PATH_ITEM_RARITY))
    hidden_path_bump_chance: float = HIDDEN_PATH_BUMP_CHANCE
    hidden_path_level_offsets: Tuple[int, int] = HIDDEN_PATH_LEVEL_OFFSETS


@dataclass(frozen=True)
class DefeatedEnemy:
    """The parts of a defeated enemy that loot cares about."""
    name: str
    level: int
    enemy_type: EnemyType = EnemyType.NORMAL


@dataclass(frozen=True)
class LootReward:
    """Gold and items from one reward event."""
    gold: int
    items: Tuple[ItemInstance, ...] = ()

    @property
    def item_count(self) -> int:
        return len(self.items)

    def __add__(self, other: 'LootReward') -> 'LootReward':
        if not isinstance(other, LootReward):
            return NotImplemented
        return LootReward(gold=self.gold + other.gold, items=self.items + other.items)


EMPTY_REWARD = LootReward(gold=0)


class LootEngine:
    """Generates rewards from injected randomness and ids."""

    def __init__(
        self,
        rng: RandomSource,
        config: Optional[LootConfig] = None,
        id_provider: IdProvider = uuid_provider,
    ):
        self.rng = rng
        self.config = config or LootConfig()
        self.id_provider = id_provider

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _reward_gold(self, base: int) -> int:
        low, high = self.config.reward_gold_spread
        return math.floor(base * uniform(self.rng, low, high))

    def _item_level(self, level: int, offsets: Tuple[int, int]) -> int:
        return max(1, level + randint(self.rng, offsets[0], offsets[1]))

    def _make_item(self, level: int, rarity: ItemRarity) -> ItemInstance:
        return generate_item(level, rarity, self.rng, self.id_provider)

    # -------------------------------------------------------------------------
    # Combat
    # -------------------------------------------------------------------------

    def calculate_combat_gold(self, enemies: Sequence[DefeatedEnemy]) -> int:
        """Gold for a cleared encounter, one variance draw per enemy."""
        variance = self.config.gold_variance
        total = 0
        for enemy in enemies:
            mult = uniform(self.rng, 1 - variance, 1 + variance)
            total += math.floor(enemy.level * self.config.base_gold_per_level * mult)
        return total

    def roll_enemy_drop(self, enemy: DefeatedEnemy) -> Optional[ItemInstance]:
        """One drop trial; on success an item near the enemy's level."""
        drop_chance = self.config.drop_chances.get(enemy.enemy_type, 0.0)
        if not chance(self.rng, drop_chance):
            return None

        rarity = roll_rarity(self.config.rarity_distribution, self.rng)
        level = self._item_level(
            enemy.level,
            (self.config.min_item_level_offset, self.config.max_item_level_offset),
        )
        logger.debug("%s drops %s item (level %d)", enemy.name, rarity.value, level)
        return self._make_item(level, rarity)

    def generate_combat_loot(self, enemies: Sequence[DefeatedEnemy]) -> LootReward:
        """Gold for every enemy, then one drop trial per enemy in order."""
        gold = self.calculate_combat_gold(enemies)
        items: List[ItemInstance] = []
        for enemy in enemies:
            item = self.roll_enemy_drop(enemy)
            if item is not None:
                items.append(item)

        logger.info("combat loot: %d gold, %d items from %d enemies",
                    gold, len(items), len(enemies))
        return LootReward(gold=gold, items=tuple(items))

    # -------------------------------------------------------------------------
    # Treasure chests
    # -------------------------------------------------------------------------

    def generate_treasure_chest_loot(self, quality: LootQuality, player_level: int) -> LootReward:
        """Contents of a chest of the given quality."""
        cfg = self.config
        try:
            base_gold = cfg.chest_base_gold[quality]
            count = cfg.chest_item_counts[quality]
            rates = cfg.chest_rarity_rates[quality]
        except KeyError:
            raise ConfigurationError(f"no treasure chest table for quality: {quality.value}") from None

        gold = self._reward_gold(base_gold)
        items = []
        for _ in range(count):
            rarity = roll_rarity(rates, self.rng)
            level = self._item_level(player_level, cfg.chest_level_offsets)
            items.append(self._make_item(level, rarity))

        logger.info("%s chest: %d gold, %d items", quality.value, gold, len(items))
        return LootReward(gold=gold, items=tuple(items))

    # -------------------------------------------------------------------------
    # Hidden paths
    # -------------------------------------------------------------------------

    def generate_hidden_path_loot(self, quality: LootQuality, player_level: int) -> LootReward:
        """Reward for discovering a hidden path. Only rare and better qualities exist."""
        cfg = self.config
        try:
            base_gold = cfg.hidden_path_base_gold[quality]
            count = cfg.hidden_path_item_counts[quality]
            base_rarity = cfg.hidden_path_item_rarity[quality]
        except KeyError:
            raise ConfigurationError(f"no hidden path table for quality: {quality.value}") from None

        gold = self._reward_gold(base_gold)
        items = []
        for _ in range(count):
            rarity = base_rarity
            if chance(self.rng, cfg.hidden_path_bump_chance):
                rarity = bump_rarity(base_rarity)
            level = self._item_level(player_level, cfg.hidden_path_level_offsets)
            items.append(self._make_item(level, rarity))

        logger.info("%s hidden path: %d gold, %d items", quality.value, gold, len(items))
        return LootReward(gold=gold, items=tuple(items))
