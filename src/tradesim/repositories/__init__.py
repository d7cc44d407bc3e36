"""Repository layer - data access abstractions and implementations."""

from tradesim.repositories.protocols import (
    AccountRepository,
    HoldingRepository,
    TransactionRepository,
    TransferRepository,
    InstrumentRepository,
    AchievementRepository,
    GameScoreRepository,
)

__all__ = [
    "AccountRepository",
    "HoldingRepository",
    "TransactionRepository",
    "TransferRepository",
    "InstrumentRepository",
    "AchievementRepository",
    "GameScoreRepository",
]
