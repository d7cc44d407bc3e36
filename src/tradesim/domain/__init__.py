"""Domain layer - pure business models with no external dependencies."""

from tradesim.domain.models import (
    Account,
    Holding,
    Instrument,
    Transaction,
    FundTransfer,
    Achievement,
    AchievementUnlock,
    GameScore,
    TransactionType,
    TransferDirection,
    RiskProfile,
    VolatilityClass,
    AssetType,
    AchievementCategory,
    GameType,
)

__all__ = [
    "Account",
    "Holding",
    "Instrument",
    "Transaction",
    "FundTransfer",
    "Achievement",
    "AchievementUnlock",
    "GameScore",
    "TransactionType",
    "TransferDirection",
    "RiskProfile",
    "VolatilityClass",
    "AssetType",
    "AchievementCategory",
    "GameType",
]
