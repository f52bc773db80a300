"""
Reward Economy - Errors
=======================
Exceptions for broken configuration, and failure reasons for economic
actions that are refused.

Refused purchases, enchants and bank transfers are ordinary outcomes: they
come back inside a result record with a FailureReason and never raise.
Only configuration problems raise.
"""

from enum import Enum


class EconomyError(Exception):
    """Base class for reward economy errors."""


class ConfigurationError(EconomyError):
    """A table or catalog cannot satisfy a request (e.g. no hero of a rarity)."""


class FailureReason(Enum):
    """Why an economic action was refused."""
    INSUFFICIENT_FUNDS = "insufficient_funds"
    MAX_LEVEL_REACHED = "max_level_reached"
    FREE_SUMMON_UNAVAILABLE = "free_summon_unavailable"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BANK_BALANCE = "insufficient_bank_balance"

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self]


FAILURE_MESSAGES = {
    FailureReason.INSUFFICIENT_FUNDS: "Not enough gold",
    FailureReason.MAX_LEVEL_REACHED: "Item is already at maximum enchant level",
    FailureReason.FREE_SUMMON_UNAVAILABLE: "Free summon already used today",
    FailureReason.INVALID_AMOUNT: "Amount must be positive",
    FailureReason.INSUFFICIENT_BANK_BALANCE: "Not enough gold in the bank",
}
