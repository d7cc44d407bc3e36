"""Domain models package."""

from tradesim.domain.models.enums import (
    TransactionType,
    TransferDirection,
    RiskProfile,
    VolatilityClass,
    AssetType,
    AchievementCategory,
    GameType,
)
from tradesim.domain.models.account import Account
from tradesim.domain.models.holding import Holding
from tradesim.domain.models.instrument import Instrument
from tradesim.domain.models.transaction import Transaction, FundTransfer
from tradesim.domain.models.achievement import Achievement, AchievementUnlock, GameScore

__all__ = [
    "TransactionType",
    "TransferDirection",
    "RiskProfile",
    "VolatilityClass",
    "AssetType",
    "AchievementCategory",
    "GameType",
    "Account",
    "Holding",
    "Instrument",
    "Transaction",
    "FundTransfer",
    "Achievement",
    "AchievementUnlock",
    "GameScore",
]
