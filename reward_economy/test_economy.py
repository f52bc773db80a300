"""
Unit tests for economy.py - healer, smithy, market and bank.
"""
import math

import pytest

from reward_economy.catalog import default_catalog
from reward_economy.constants import ItemRarity, ItemSlot
from reward_economy.economy import EconomyService, ServicePrices
from reward_economy.errors import FailureReason
from reward_economy.heroes import create_hero
from reward_economy.items import ItemInstance
from reward_economy.sources import ScriptedRandom, SeededRandom, sequential_ids
from reward_economy.stats import StatBlock


def _service(draws=None, seed=None, prices=None):
    rng = SeededRandom(seed) if seed is not None else ScriptedRandom(draws or [])
    return EconomyService(rng, prices=prices)


def _item(enchant_level=0, gold_value=100):
    return ItemInstance(
        id='sword', name='Sword', rarity=ItemRarity.RARE, level=5, slot=ItemSlot.WEAPON,
        stats=StatBlock(atk=12, spd=2, crit=0.5), gold_value=gold_value,
        enchant_level=enchant_level,
    )


def _hero(template_id='common_soldier'):
    return create_hero(default_catalog().get(template_id), sequential_ids("hero"))


class TestHealer:
    """Tests for hero and party healing."""

    def test_heal_cost_is_missing_hp(self):
        """One gold per missing HP."""
        hero = _hero()
        hero.take_damage(30)
        assert _service().heal_cost(hero) == 30

    def test_heal_full_hero_is_free(self):
        """A full-HP hero costs nothing to heal."""
        hero = _hero()
        service = _service()
        assert service.heal_cost(hero) == 0
        result = service.heal_hero(hero, gold=10)
        assert result.success
        assert result.new_gold == 10

    def test_heal_hero(self):
        """Healing restores HP and charges the cost."""
        hero = _hero()
        hero.take_damage(30)
        result = _service().heal_hero(hero, gold=100)
        assert result.success
        assert result.new_gold == 70
        assert result.hp_restored == 30
        assert hero.current_hp == hero.max_hp

    def test_heal_insufficient_gold(self):
        """Too little gold leaves HP and gold alone."""
        hero = _hero()
        hero.take_damage(30)
        result = _service().heal_hero(hero, gold=29)
        assert not result.success
        assert result.reason == FailureReason.INSUFFICIENT_FUNDS
        assert result.new_gold == 29
        assert hero.missing_hp == 30

    def test_party_heal_capped(self):
        """70 missing HP across the party is capped at 50 gold."""
        a, b = _hero(), _hero('common_guard')
        a.take_damage(30)
        b.take_damage(40)
        service = _service()
        assert service.party_heal_cost([a, b]) == 50
        result = service.heal_party([a, b], gold=60)
        assert result.success
        assert result.new_gold == 10
        assert a.missing_hp == 0 and b.missing_hp == 0

    def test_negative_heal_cost_refused(self):
        """A negative cost never adds gold."""
        hero = _hero()
        hero.take_damage(30)
        service = _service()
        single = service.heal_hero(hero, gold=100, cost=-50)
        party = service.heal_party([hero], gold=100, cost=-50)
        for result in (single, party):
            assert not result.success
            assert result.reason == FailureReason.INVALID_AMOUNT
            assert result.new_gold == 100
        assert hero.missing_hp == 30

    def test_party_heal_below_cap(self):
        """Small totals cost the missing HP."""
        a = _hero()
        a.take_damage(12)
        assert _service().party_heal_cost([a, _hero()]) == 12


class TestEnchanting:
    """Tests for the smithy."""

    def test_cost_curve(self):
        """100, 150, 225, then strictly increasing; 0 at max."""
        service = _service()
        costs = [service.enchant_cost(_item(level)) for level in range(10)]
        assert costs[:3] == [100, 150, 225]
        assert all(b > a for a, b in zip(costs, costs[1:]))
        assert service.enchant_cost(_item(10)) == 0

    def test_success_rate_table(self):
        """100% at +0, 10% at +9, 0% at +10."""
        service = _service()
        assert service.enchant_success_rate(_item(0)) == 100
        assert service.enchant_success_rate(_item(9)) == 10
        assert service.enchant_success_rate(_item(10)) == 0

    def test_level_nine_success(self):
        """Draw 0.05 is under 10% and succeeds; the cost is charged."""
        service = _service([0.05])
        item = _item(9)
        cost = service.enchant_cost(item)
        result = service.attempt_enchant(item, cost, gold=10000)
        assert result.success
        assert result.charged
        assert result.new_gold == 10000 - cost
        assert item.enchant_level == 10
        assert result.message == "Successfully enchanted to +10!"

    def test_level_nine_failure_still_charges(self):
        """Draw 0.5 fails, the level stays and the cost is still paid."""
        service = _service([0.5])
        item = _item(9)
        cost = service.enchant_cost(item)
        result = service.attempt_enchant(item, cost, gold=10000)
        assert not result.success
        assert result.charged
        assert result.new_gold == 10000 - cost
        assert item.enchant_level == 9

    def test_boundary_draw_succeeds(self):
        """A roll exactly on the rate counts as a success (+5, 50%, draw 0.5)."""
        service = _service([0.5])
        item = _item(5)
        result = service.enchant(item, gold=10000)
        assert result.success
        assert item.enchant_level == 6

    def test_negative_enchant_cost_refused(self):
        """A negative cost is refused without a draw."""
        service = _service([])
        item = _item(3)
        result = service.attempt_enchant(item, -100, gold=50)
        assert not result.success
        assert result.reason == FailureReason.INVALID_AMOUNT
        assert result.new_gold == 50
        assert item.enchant_level == 3

    def test_insufficient_gold_no_draw(self):
        """Refused attempts do not draw or charge."""
        service = _service([])
        item = _item(0)
        result = service.attempt_enchant(item, 100, gold=99)
        assert not result.success
        assert not result.charged
        assert result.reason == FailureReason.INSUFFICIENT_FUNDS
        assert result.new_gold == 99
        assert service.rng.draws_used == 0

    def test_max_level_refused(self):
        """A +10 item cannot be enchanted and is not charged."""
        service = _service([])
        result = service.enchant(_item(10), gold=5000)
        assert not result.success
        assert result.reason == FailureReason.MAX_LEVEL_REACHED
        assert result.new_gold == 5000
        assert result.new_level == 10

    def test_level_zero_always_succeeds(self):
        """100% success at +0 even with the highest draw."""
        service = _service([0.999])
        item = _item(0)
        result = service.enchant(item, gold=100)
        assert result.success
        assert result.new_gold == 0
        assert item.enchant_level == 1

    def test_enchant_never_exceeds_max(self):
        """Repeated enchanting stops at +10."""
        service = _service(seed=8)
        item = _item(0)
        gold = 10 ** 9
        for _ in range(500):
            gold = service.enchant(item, gold).new_gold
        assert item.enchant_level == 10


class TestMarket:
    """Tests for buy and sell pricing."""

    def test_buy_price(self):
        """Buy at 1.5x value, rounded up."""
        service = _service()
        assert service.buy_price(_item(gold_value=100)) == 150
        assert service.buy_price(_item(gold_value=7)) == 11

    def test_sell_price_with_enchant(self):
        """Sell at 0.6x of (value + 50 per enchant)."""
        assert _service().sell_price(_item(2, gold_value=100)) == 120

    def test_buy_item(self):
        """Buying deducts the price."""
        service = _service()
        assert service.buy_item(150, gold=200).new_gold == 50
        refused = service.buy_item(150, gold=149)
        assert not refused.success
        assert refused.reason == FailureReason.INSUFFICIENT_FUNDS
        assert refused.new_gold == 149
        negative = service.buy_item(-10, gold=5)
        assert negative.reason == FailureReason.INVALID_AMOUNT
        assert negative.new_gold == 5

    def test_sell_item(self):
        """Selling adds the sell price."""
        result = _service().sell_item(_item(gold_value=100), gold=10)
        assert result.success
        assert result.new_gold == 70

    def test_market_stock(self):
        """Ten listings near the town level, priced at the buy multiplier."""
        service = _service(seed=17)
        listings = service.generate_market_stock(6, id_provider=sequential_ids("shop"))
        assert len(listings) == 10
        for listing in listings:
            assert 6 <= listing.item.level <= 8
            assert listing.price == math.ceil(listing.item.gold_value * 1.5)
        assert listings[0].item.id == "shop_1"


class TestBank:
    """Tests for deposits, withdrawals and interest."""

    def test_deposit(self):
        """Deposits are free by default."""
        result = _service().deposit_gold(500, gold=800, stored_gold=100)
        assert result.success
        assert result.new_gold == 300
        assert result.new_balance == 600
        assert result.fee == 0

    def test_deposit_fee_on_top(self):
        """A deposit fee is paid on top of the amount."""
        service = _service(prices=ServicePrices(deposit_fee=2.0))
        result = service.deposit_gold(100, gold=102, stored_gold=0)
        assert result.success
        assert result.new_gold == 0
        refused = service.deposit_gold(100, gold=101, stored_gold=0)
        assert refused.reason == FailureReason.INSUFFICIENT_FUNDS

    def test_withdraw_fee(self):
        """1% withdrawal fee, rounded up, taken from the amount."""
        service = _service()
        assert service.withdraw_fee(100) == 1
        assert service.withdraw_fee(50) == 1
        result = service.withdraw_gold(100, gold=0, stored_gold=300)
        assert result.success
        assert result.new_gold == 99
        assert result.new_balance == 200

    def test_withdraw_more_than_stored(self):
        """Withdrawals cannot exceed the balance."""
        result = _service().withdraw_gold(301, gold=0, stored_gold=300)
        assert not result.success
        assert result.reason == FailureReason.INSUFFICIENT_BANK_BALANCE
        assert result.new_balance == 300

    @pytest.mark.parametrize("amount", [0, -5])
    def test_invalid_amounts(self, amount):
        """Zero and negative amounts are refused."""
        service = _service()
        assert service.deposit_gold(amount, 100, 100).reason == FailureReason.INVALID_AMOUNT
        assert service.withdraw_gold(amount, 100, 100).reason == FailureReason.INVALID_AMOUNT

    def test_interest(self):
        """0.5% per day, floored."""
        service = _service()
        assert service.calculate_interest(1000, 3) == 15
        assert service.calculate_interest(150, 1) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
