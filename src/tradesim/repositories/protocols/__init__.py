"""Repository protocol definitions (interfaces)."""

from tradesim.repositories.protocols.account_repo import AccountRepository
from tradesim.repositories.protocols.holding_repo import HoldingRepository
from tradesim.repositories.protocols.transaction_repo import (
    TransactionRepository,
    TransferRepository,
)
from tradesim.repositories.protocols.instrument_repo import InstrumentRepository
from tradesim.repositories.protocols.achievement_repo import (
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
