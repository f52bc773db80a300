"""
Unit tests for loot.py - combat gold and drops, treasure chests, hidden paths.
"""
import pytest

from reward_economy.constants import EnemyType, ItemRarity, ItemSlot, LootQuality
from reward_economy.errors import ConfigurationError
from reward_economy.loot import (
    EMPTY_REWARD,
    DefeatedEnemy,
    LootConfig,
    LootEngine,
    LootReward,
)
from reward_economy.sources import ScriptedRandom, SeededRandom, sequential_ids


def _engine(draws=None, seed=None, config=None):
    rng = SeededRandom(seed) if seed is not None else ScriptedRandom(draws or [])
    return LootEngine(rng, config=config, id_provider=sequential_ids("item"))


class TestCombatGold:
    """Tests for calculate_combat_gold."""

    def test_low_variance(self):
        """A zero draw gives the 0.8 multiplier: floor(5 * 10 * 0.8) = 40."""
        engine = _engine([0.0])
        assert engine.calculate_combat_gold([DefeatedEnemy("Slime", 5)]) == 40

    def test_one_draw_per_enemy(self):
        """Each enemy rolls its own variance."""
        engine = _engine([0.0, 0.0, 0.0])
        enemies = [DefeatedEnemy("Slime", 5)] * 3
        assert engine.calculate_combat_gold(enemies) == 120
        assert engine.rng.draws_used == 3

    def test_gold_within_bounds(self):
        """Gold stays within floor(level * 10 * [0.8, 1.2])."""
        engine = _engine(seed=7)
        for level in (1, 5, 20, 60):
            for _ in range(200):
                gold = engine.calculate_combat_gold([DefeatedEnemy("Orc", level)])
                assert int(level * 10 * 0.8) - 1 <= gold <= level * 10 * 1.2

    def test_no_enemies(self):
        """An empty encounter gives nothing."""
        assert _engine().generate_combat_loot([]) == EMPTY_REWARD


class TestCombatDrops:
    """Tests for generate_combat_loot."""

    def test_normal_enemy_misses_drop(self):
        """0.99 fails the 30% drop trial."""
        reward = _engine([0.0, 0.99]).generate_combat_loot([DefeatedEnemy("Slime", 5)])
        assert reward.gold == 40
        assert reward.items == ()

    def test_boss_always_drops(self):
        """Boss drop: common rarity, level 10 - 1, helmet slot."""
        draws = [0.0, 0.99, 0.5, 0.0, 0.0, 0.0]
        reward = _engine(draws).generate_combat_loot(
            [DefeatedEnemy("Dragon", 10, EnemyType.BOSS)])
        assert reward.gold == 80
        assert reward.item_count == 1
        item = reward.items[0]
        assert item.id == "item_1"
        assert item.level == 9
        assert item.rarity == ItemRarity.COMMON
        assert item.slot == ItemSlot.HELMET
        assert item.name == "Helmet"

    def test_item_level_clamped(self):
        """A level-1 enemy never drops a level-0 item."""
        draws = [0.0, 0.0, 0.5, 0.0, 0.0, 0.0]
        reward = _engine(draws).generate_combat_loot(
            [DefeatedEnemy("Rat", 1, EnemyType.BOSS)])
        assert reward.items[0].level == 1

    def test_elite_drop_boundary(self):
        """Elite drops when the draw is below 0.5."""
        engine = _engine([0.0, 0.49, 0.5, 0.0, 0.0, 0.0])
        reward = engine.generate_combat_loot([DefeatedEnemy("Knight", 3, EnemyType.ELITE)])
        assert reward.item_count == 1

        engine = _engine([0.0, 0.5])
        reward = engine.generate_combat_loot([DefeatedEnemy("Knight", 3, EnemyType.ELITE)])
        assert reward.item_count == 0

    def test_seeded_loot_reproducible(self):
        """Same seed, same loot."""
        enemies = [DefeatedEnemy("Orc", 8, EnemyType.ELITE), DefeatedEnemy("Boss", 10, EnemyType.BOSS)]
        a = _engine(seed=3).generate_combat_loot(enemies)
        b = _engine(seed=3).generate_combat_loot(enemies)
        assert a == b

    def test_custom_drop_table(self):
        """Drop chances come from the config."""
        config = LootConfig(drop_chances={EnemyType.NORMAL: 0.0})
        reward = _engine(seed=1, config=config).generate_combat_loot(
            [DefeatedEnemy("Slime", 4)] * 20)
        assert reward.item_count == 0


class TestTreasureChest:
    """Tests for generate_treasure_chest_loot."""

    def test_common_chest(self):
        """Gold, then per item: rarity, level offset, slot, noun."""
        reward = _engine([0.0, 0.5, 0.5, 0.0, 0.0]).generate_treasure_chest_loot(
            LootQuality.COMMON, 5)
        assert reward.gold == 40
        assert reward.item_count == 1
        assert reward.items[0].level == 5
        assert reward.items[0].rarity == ItemRarity.COMMON

    @pytest.mark.parametrize("quality,count", [
        (LootQuality.COMMON, 1),
        (LootQuality.RARE, 2),
        (LootQuality.EPIC, 3),
        (LootQuality.LEGENDARY, 4),
    ])
    def test_item_counts(self, quality, count):
        """Chest quality sets the item count."""
        reward = _engine(seed=4).generate_treasure_chest_loot(quality, 10)
        assert reward.item_count == count

    def test_item_levels_near_player(self):
        """Chest items sit within one level of the player."""
        engine = _engine(seed=12)
        for _ in range(50):
            for item in engine.generate_treasure_chest_loot(LootQuality.LEGENDARY, 10).items:
                assert 9 <= item.level <= 11


class TestHiddenPath:
    """Tests for generate_hidden_path_loot."""

    def test_bump_chance(self):
        """A draw under 0.2 bumps rare to epic."""
        draws = [0.0] + [0.1, 0.0, 0.0, 0.0, 0.0] + [0.5, 0.0, 0.0, 0.0, 0.0] * 2
        reward = _engine(draws).generate_hidden_path_loot(LootQuality.RARE, 5)
        assert reward.gold == 240
        assert [i.rarity for i in reward.items] == [ItemRarity.EPIC, ItemRarity.RARE, ItemRarity.RARE]
        assert all(i.level == 5 for i in reward.items)

    def test_legendary_does_not_bump_past_legendary(self):
        """Legendary items stay legendary even when the bump fires."""
        reward = _engine([0.0] * 26).generate_hidden_path_loot(LootQuality.LEGENDARY, 20)
        assert reward.item_count == 5
        assert all(i.rarity == ItemRarity.LEGENDARY for i in reward.items)

    def test_levels_at_or_above_player(self):
        """Hidden path items are player level + 0..4."""
        engine = _engine(seed=21)
        for _ in range(50):
            for item in engine.generate_hidden_path_loot(LootQuality.EPIC, 10).items:
                assert 10 <= item.level <= 14

    def test_common_quality_rejected(self):
        """There is no common hidden path."""
        with pytest.raises(ConfigurationError):
            _engine([0.0]).generate_hidden_path_loot(LootQuality.COMMON, 5)


class TestLootReward:
    """Tests for LootReward."""

    def test_addition(self):
        """Rewards combine gold and items."""
        total = LootReward(gold=10) + LootReward(gold=5)
        assert total.gold == 15
        assert total.item_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
