"""
Unit tests for constants.py - enum ordering and table consistency.
"""
import pytest

from reward_economy.constants import (
    CHEST_ITEM_COUNTS,
    CHEST_RARITY_RATES,
    CLASS_BASE_STATS,
    CLASS_CREATION_GROWTH,
    COMBAT_RARITY_RATES,
    COST_SINGLE_SUMMON,
    COST_TEN_SUMMON,
    DROP_CHANCES,
    ENCHANT_SUCCESS_RATES,
    GACHA_RATES,
    HIDDEN_PATH_BASE_GOLD,
    HIDDEN_PATH_ITEM_COUNTS,
    ITEM_BASE_VALUES,
    ITEM_NAME_PREFIXES,
    ITEM_RARITY_MULTIPLIERS,
    MAX_ENCHANT_LEVEL,
    PITY_THRESHOLD,
    SLOT_NOUNS,
    SLOT_STAT_WEIGHTS,
    EnemyType,
    HeroClass,
    HeroRarity,
    ItemRarity,
    ItemSlot,
    LootQuality,
    get_rarity_color,
    get_rarity_display_name,
    hero_rarity_from_string,
    item_rarity_from_string,
)


class TestRarityEnums:
    """Tests for rarity enum ordering and helpers."""

    def test_hero_rarity_order(self):
        """Hero rarities run common -> legendary."""
        assert list(HeroRarity) == [
            HeroRarity.COMMON, HeroRarity.RARE, HeroRarity.EPIC, HeroRarity.LEGENDARY,
        ]

    def test_item_rarity_order(self):
        """Item rarities run common -> mythic."""
        tiers = list(ItemRarity)
        assert tiers[0] == ItemRarity.COMMON
        assert tiers[-1] == ItemRarity.MYTHIC

    def test_epic_or_better(self):
        """Only epic and legendary count as epic-or-better."""
        assert HeroRarity.EPIC.is_epic_or_better
        assert HeroRarity.LEGENDARY.is_epic_or_better
        assert not HeroRarity.RARE.is_epic_or_better
        assert not HeroRarity.COMMON.is_epic_or_better


class TestGachaTables:
    """Tests for gacha constants."""

    def test_rates_sum_to_100(self):
        """Hero rates are percentages summing to 100."""
        assert sum(GACHA_RATES.values()) == pytest.approx(100.0)

    def test_documented_values(self):
        """Rates, prices and pity match the published table."""
        assert GACHA_RATES[HeroRarity.LEGENDARY] == 3.0
        assert GACHA_RATES[HeroRarity.EPIC] == 12.0
        assert PITY_THRESHOLD == 100
        assert COST_SINGLE_SUMMON == 1000
        assert COST_TEN_SUMMON == 9000


class TestLootTables:
    """Tests for loot constants."""

    def test_combat_distribution_sums_to_100(self):
        """Combat rarity distribution sums to 100."""
        assert sum(COMBAT_RARITY_RATES.values()) == pytest.approx(100.0)

    @pytest.mark.parametrize("quality", list(LootQuality))
    def test_chest_tables_sum_to_100(self, quality):
        """Every chest table sums to 100."""
        assert sum(CHEST_RARITY_RATES[quality].values()) == pytest.approx(100.0)

    def test_chest_counts(self):
        """Chests hold 1-4 items by quality."""
        assert [CHEST_ITEM_COUNTS[q] for q in LootQuality] == [1, 2, 3, 4]

    def test_hidden_path_excludes_common(self):
        """Hidden paths exist only for rare and better."""
        assert LootQuality.COMMON not in HIDDEN_PATH_BASE_GOLD
        assert [HIDDEN_PATH_ITEM_COUNTS[q] for q in
                (LootQuality.RARE, LootQuality.EPIC, LootQuality.LEGENDARY)] == [3, 4, 5]

    def test_drop_chances(self):
        """Boss drops are guaranteed."""
        assert DROP_CHANCES[EnemyType.NORMAL] == 0.30
        assert DROP_CHANCES[EnemyType.ELITE] == 0.50
        assert DROP_CHANCES[EnemyType.BOSS] == 1.00


class TestItemTables:
    """Tests for item constants."""

    def test_every_rarity_has_tables(self):
        """Every item rarity has a multiplier, value and prefix list."""
        for rarity in ItemRarity:
            assert rarity in ITEM_RARITY_MULTIPLIERS
            assert rarity in ITEM_BASE_VALUES
            assert rarity in ITEM_NAME_PREFIXES

    def test_common_has_no_prefix(self):
        """Common items are unprefixed."""
        assert ITEM_NAME_PREFIXES[ItemRarity.COMMON] == []

    def test_every_slot_has_tables(self):
        """Every slot has weights and nouns."""
        for slot in ItemSlot:
            assert len(SLOT_STAT_WEIGHTS[slot]) == 5
            assert SLOT_NOUNS[slot]

    def test_every_class_has_curves(self):
        """Every hero class has base stats and creation growth."""
        for hero_class in HeroClass:
            assert len(CLASS_BASE_STATS[hero_class]) == 5
            assert len(CLASS_CREATION_GROWTH[hero_class]) == 5


class TestEnchantTables:
    """Tests for enchant success rates."""

    def test_rates_fall_by_ten(self):
        """100% at +0 down to 10% at +9."""
        assert [ENCHANT_SUCCESS_RATES[level] for level in range(MAX_ENCHANT_LEVEL)] == \
            [100, 90, 80, 70, 60, 50, 40, 30, 20, 10]

    def test_no_rate_at_max(self):
        """The table stops below max level."""
        assert MAX_ENCHANT_LEVEL not in ENCHANT_SUCCESS_RATES


class TestHelpers:
    """Tests for display helpers."""

    def test_rarity_color(self):
        """Colors are looked up per rarity family."""
        assert get_rarity_color(HeroRarity.LEGENDARY) == "#ff8c00"
        assert get_rarity_color(ItemRarity.LEGENDARY) == "#ff9800"

    def test_display_name(self):
        """Display names are capitalised values."""
        assert get_rarity_display_name(ItemRarity.UNCOMMON) == "Uncommon"

    def test_from_string(self):
        """Parsing is case-insensitive; unknown strings give None."""
        assert hero_rarity_from_string(" Epic ") == HeroRarity.EPIC
        assert item_rarity_from_string("MYTHIC") == ItemRarity.MYTHIC
        assert hero_rarity_from_string("mythic") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
