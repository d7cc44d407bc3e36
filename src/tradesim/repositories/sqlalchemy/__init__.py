"""SQLAlchemy repository implementations."""

from tradesim.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from tradesim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradesim.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from tradesim.repositories.sqlalchemy.transaction_repo import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyTransferRepository,
)
from tradesim.repositories.sqlalchemy.instrument_repo import SqlAlchemyInstrumentRepository
from tradesim.repositories.sqlalchemy.achievement_repo import (
    SqlAlchemyAchievementRepository,
    SqlAlchemyGameScoreRepository,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyTransferRepository",
    "SqlAlchemyInstrumentRepository",
    "SqlAlchemyAchievementRepository",
    "SqlAlchemyGameScoreRepository",
]
