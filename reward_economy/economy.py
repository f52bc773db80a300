"""
Reward Economy - Town Services
==============================
Pricing and transactions for the healer, smithy, market and bank.

Every action takes the player's gold and returns an outcome record with the
resulting balance. Refusals (not enough gold, max enchant, bad amounts) are
outcomes with a FailureReason, never exceptions. Inventory and roster
bookkeeping stays with the caller.

Healer:
- heal_cost = ceil(missing_hp * heal_per_hp)
- party heal = min(ceil(total_missing * heal_per_hp), full_heal_cost)

Smithy:
- enchant_cost = ceil(100 * 1.5 ** level), 0 at max level (10)
- success rate 100% at +0, minus 10 points per level, 10% at +9
- an authorized attempt always charges; success when draw * 100 <= rate
  (the boundary draw counts as a success)

Market:
- buy = ceil(gold_value * 1.5)
- sell = ceil((gold_value + enchant_level * 50) * 0.6)

Bank:
- deposit fee 0%, withdrawal fee 1% (both rounded up)
- interest = floor(stored * 0.5% * days)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .constants import (
    BUY_PRICE_MULTIPLIER,
    COMBAT_RARITY_RATES,
    DAILY_INTEREST_PCT,
    DEPOSIT_FEE_PCT,
    ENCHANT_BASE_COST,
    ENCHANT_LEVEL_MULTIPLIER,
    ENCHANT_SELL_BONUS,
    ENCHANT_SUCCESS_RATES,
    FULL_HEAL_COST,
    HEAL_PER_HP,
    MARKET_LEVEL_SPREAD,
    MARKET_STOCK_SIZE,
    MAX_ENCHANT_LEVEL,
    SELL_PRICE_MULTIPLIER,
    WITHDRAW_FEE_PCT,
    ItemRarity,
)
from .errors import FailureReason
from .heroes import HeroInstance
from .items import ItemInstance, generate_item
from .rarity import roll_rarity
from .sources import IdProvider, RandomSource, randint, uuid_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServicePrices:
    """Town price list. Fees and interest are percentages."""
    heal_per_hp: float = HEAL_PER_HP
    full_heal_cost: int = FULL_HEAL_COST
    enchant_base_cost: int = ENCHANT_BASE_COST
    enchant_level_multiplier: float = ENCHANT_LEVEL_MULTIPLIER
    max_enchant_level: int = MAX_ENCHANT_LEVEL
    enchant_success_rates: Dict[int, int] = field(
        default_factory=lambda: dict(ENCHANT_SUCCESS_RATES))
    enchant_sell_bonus: int = ENCHANT_SELL_BONUS
    buy_price_multiplier: float = BUY_PRICE_MULTIPLIER
    sell_price_multiplier: float = SELL_PRICE_MULTIPLIER
    deposit_fee: float = DEPOSIT_FEE_PCT
    withdraw_fee: float = WITHDRAW_FEE_PCT
    interest_rate: float = DAILY_INTEREST_PCT
    market_level_spread: int = MARKET_LEVEL_SPREAD
    market_rarity_rates: Dict[ItemRarity, float] = field(
        default_factory=lambda: dict(COMBAT_RARITY_RATES))


# =============================================================================
# OUTCOMES
# =============================================================================

@dataclass(frozen=True)
class HealOutcome:
    success: bool
    new_gold: int
    cost: int = 0
    hp_restored: float = 0
    reason: Optional[FailureReason] = None


@dataclass(frozen=True)
class EnchantOutcome:
    """
    Result of an enchant attempt.

    ``charged`` is True whenever the attempt was authorized, whether the
    enchant succeeded or not.
    """
    success: bool
    new_gold: int
    new_level: int
    charged: bool = False
    cost: int = 0
    success_rate: int = 0
    reason: Optional[FailureReason] = None

    @property
    def message(self) -> str:
        if self.reason is not None:
            return self.reason.message
        if self.success:
            return f"Successfully enchanted to +{self.new_level}!"
        return f"Enchantment failed! Item remains at +{self.new_level}."


@dataclass(frozen=True)
class TransactionOutcome:
    success: bool
    new_gold: int
    price: int = 0
    reason: Optional[FailureReason] = None


@dataclass(frozen=True)
class BankOutcome:
    success: bool
    new_gold: int
    new_balance: int
    fee: int = 0
    reason: Optional[FailureReason] = None


@dataclass(frozen=True)
class MarketListing:
    item: ItemInstance
    price: int
    stock: int = 1


# =============================================================================
# SERVICE
# =============================================================================

class EconomyService:
    """Town pricing. Holds only the price list and the injected random source."""

    def __init__(self, rng: RandomSource, prices: Optional[ServicePrices] = None):
        self.rng = rng
        self.prices = prices or ServicePrices()

    # -------------------------------------------------------------------------
    # Healer
    # -------------------------------------------------------------------------

    def heal_cost(self, hero: HeroInstance) -> int:
        missing = hero.missing_hp
        if missing <= 0:
            return 0
        return math.ceil(missing * self.prices.heal_per_hp)

    def party_heal_cost(self, heroes: Sequence[HeroInstance]) -> int:
        """Whole-party heal, capped at the flat full-heal price."""
        total_missing = sum(hero.missing_hp for hero in heroes)
        if total_missing <= 0:
            return 0
        return min(math.ceil(total_missing * self.prices.heal_per_hp),
                   self.prices.full_heal_cost)

    def heal_hero(self, hero: HeroInstance, gold: int, cost: Optional[int] = None) -> HealOutcome:
        """Restore one hero to full HP if the player can pay."""
        if cost is None:
            cost = self.heal_cost(hero)
        if cost < 0:
            return HealOutcome(success=False, new_gold=gold, cost=cost,
                               reason=FailureReason.INVALID_AMOUNT)
        if gold < cost:
            return HealOutcome(success=False, new_gold=gold, cost=cost,
                               reason=FailureReason.INSUFFICIENT_FUNDS)
        restored = hero.missing_hp
        hero.restore_full_hp()
        logger.info("healed %s for %d gold", hero.name, cost)
        return HealOutcome(success=True, new_gold=gold - cost, cost=cost, hp_restored=restored)

    def heal_party(self, heroes: Sequence[HeroInstance], gold: int,
                   cost: Optional[int] = None) -> HealOutcome:
        """Restore every hero to full HP if the player can pay."""
        if cost is None:
            cost = self.party_heal_cost(heroes)
        if cost < 0:
            return HealOutcome(success=False, new_gold=gold, cost=cost,
                               reason=FailureReason.INVALID_AMOUNT)
        if gold < cost:
            return HealOutcome(success=False, new_gold=gold, cost=cost,
                               reason=FailureReason.INSUFFICIENT_FUNDS)
        restored = 0
        for hero in heroes:
            restored += hero.missing_hp
            hero.restore_full_hp()
        logger.info("healed party of %d for %d gold", len(heroes), cost)
        return HealOutcome(success=True, new_gold=gold - cost, cost=cost, hp_restored=restored)

    # -------------------------------------------------------------------------
    # Smithy
    # -------------------------------------------------------------------------

    def enchant_cost(self, item: ItemInstance) -> int:
        """Price of the next enchant attempt. 0 once the item is maxed."""
        level = item.enchant_level
        if level >= self.prices.max_enchant_level:
            return 0
        return math.ceil(self.prices.enchant_base_cost
                         * self.prices.enchant_level_multiplier ** level)

    def enchant_success_rate(self, item: ItemInstance) -> int:
        """Success chance in percent. 0 once the item is maxed."""
        if item.enchant_level >= self.prices.max_enchant_level:
            return 0
        return self.prices.enchant_success_rates.get(item.enchant_level, 0)

    def attempt_enchant(self, item: ItemInstance, cost: int, gold: int) -> EnchantOutcome:
        """
        Try to raise an item's enchant level by one.

        Refused without charge when the cost is negative, gold < cost or the
        item is at max level. Otherwise the cost is always paid and one draw
        decides the result.
        """
        level = item.enchant_level
        if cost < 0:
            return EnchantOutcome(success=False, new_gold=gold, new_level=level, cost=cost,
                                  reason=FailureReason.INVALID_AMOUNT)
        if gold < cost:
            return EnchantOutcome(success=False, new_gold=gold, new_level=level, cost=cost,
                                  reason=FailureReason.INSUFFICIENT_FUNDS)
        if level >= self.prices.max_enchant_level:
            return EnchantOutcome(success=False, new_gold=gold, new_level=level,
                                  reason=FailureReason.MAX_LEVEL_REACHED)

        rate = self.enchant_success_rate(item)
        roll = self.rng.random() * 100
        success = rate > 0 and roll <= rate
        if success:
            item.enchant_level += 1

        logger.info("enchant %s +%d -> %s (rate %d%%, cost %d)",
                    item.name, level, "success" if success else "fail", rate, cost)
        return EnchantOutcome(
            success=success,
            new_gold=gold - cost,
            new_level=item.enchant_level,
            charged=True,
            cost=cost,
            success_rate=rate,
        )

    def enchant(self, item: ItemInstance, gold: int) -> EnchantOutcome:
        """attempt_enchant at the listed price."""
        return self.attempt_enchant(item, self.enchant_cost(item), gold)

    # -------------------------------------------------------------------------
    # Market
    # -------------------------------------------------------------------------

    def buy_price(self, item: ItemInstance) -> int:
        return math.ceil(item.gold_value * self.prices.buy_price_multiplier)

    def sell_price(self, item: ItemInstance) -> int:
        value = item.gold_value + item.enchant_level * self.prices.enchant_sell_bonus
        return math.ceil(value * self.prices.sell_price_multiplier)

    def buy_item(self, price: int, gold: int) -> TransactionOutcome:
        if price < 0:
            return TransactionOutcome(success=False, new_gold=gold, price=price,
                                      reason=FailureReason.INVALID_AMOUNT)
        if gold < price:
            return TransactionOutcome(success=False, new_gold=gold, price=price,
                                      reason=FailureReason.INSUFFICIENT_FUNDS)
        return TransactionOutcome(success=True, new_gold=gold - price, price=price)

    def sell_item(self, item: ItemInstance, gold: int) -> TransactionOutcome:
        price = self.sell_price(item)
        logger.debug("sold %s for %d", item.name, price)
        return TransactionOutcome(success=True, new_gold=gold + price, price=price)

    def generate_market_stock(
        self,
        town_level: int,
        count: int = MARKET_STOCK_SIZE,
        id_provider: IdProvider = uuid_provider,
    ) -> List[MarketListing]:
        """Items for sale: level town_level + 0..2, priced at the buy multiplier."""
        listings = []
        for _ in range(count):
            level = max(1, town_level + randint(self.rng, 0, self.prices.market_level_spread))
            rarity = roll_rarity(self.prices.market_rarity_rates, self.rng)
            item = generate_item(level, rarity, self.rng, id_provider)
            listings.append(MarketListing(item=item, price=self.buy_price(item)))
        return listings

    # -------------------------------------------------------------------------
    # Bank
    # -------------------------------------------------------------------------

    def deposit_fee(self, amount: int) -> int:
        return math.ceil(amount * self.prices.deposit_fee / 100)

    def withdraw_fee(self, amount: int) -> int:
        return math.ceil(amount * self.prices.withdraw_fee / 100)

    def calculate_interest(self, stored_gold: int, days: int) -> int:
        return math.floor(stored_gold * self.prices.interest_rate / 100 * days)

    def deposit_gold(self, amount: int, gold: int, stored_gold: int) -> BankOutcome:
        """Move gold into the bank. The fee is paid on top of the amount."""
        if amount <= 0:
            return BankOutcome(success=False, new_gold=gold, new_balance=stored_gold,
                               reason=FailureReason.INVALID_AMOUNT)
        fee = self.deposit_fee(amount)
        if gold < amount + fee:
            return BankOutcome(success=False, new_gold=gold, new_balance=stored_gold, fee=fee,
                               reason=FailureReason.INSUFFICIENT_FUNDS)
        return BankOutcome(success=True, new_gold=gold - amount - fee,
                           new_balance=stored_gold + amount, fee=fee)

    def withdraw_gold(self, amount: int, gold: int, stored_gold: int) -> BankOutcome:
        """Move gold out of the bank. The fee comes out of the withdrawn amount."""
        if amount <= 0:
            return BankOutcome(success=False, new_gold=gold, new_balance=stored_gold,
                               reason=FailureReason.INVALID_AMOUNT)
        if stored_gold < amount:
            return BankOutcome(success=False, new_gold=gold, new_balance=stored_gold,
                               reason=FailureReason.INSUFFICIENT_BANK_BALANCE)
        fee = self.withdraw_fee(amount)
        return BankOutcome(success=True, new_gold=gold + amount - fee,
                           new_balance=stored_gold - amount, fee=fee)
