"""Application context for in-process service management.

Provides a centralized way to access all services without HTTP, and owns
the lifecycle of the background price feed.
"""

import logging
import random
import threading
from pathlib import Path
from typing import Callable, Optional

from sqlalchemy.orm import Session, scoped_session

from tradesim.config.settings import Settings, set_settings, get_settings
from tradesim.repositories.sqlalchemy.database import (
    init_db_with_path,
    reset_database,
    get_session_factory,
)
from tradesim.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyTransferRepository,
    SqlAlchemyInstrumentRepository,
    SqlAlchemyAchievementRepository,
    SqlAlchemyGameScoreRepository,
)
from tradesim.services import (
    AccountLockRegistry,
    AchievementEvaluator,
    HoldingStore,
    InstrumentCatalog,
    LedgerService,
    PriceFeedScheduler,
    PriceSimulator,
    RiskScorer,
)
from tradesim.services.ledger_service import UnlockCallback

logger = logging.getLogger(__name__)


def seed_catalog(session_factory: Callable[[], Session]) -> int:
    """Insert any missing default instruments."""
    session = session_factory()
    try:
        added = InstrumentCatalog(SqlAlchemyInstrumentRepository(session)).seed_defaults()
        session.commit()
        return added
    finally:
        session.close()


def create_price_feed(
    settings: Settings,
    session_factory: Callable[[], Session],
) -> PriceFeedScheduler:
    """Build (but do not start) the price feed described by the settings."""
    simulator = PriceSimulator(
        session_factory=session_factory,
        min_interval_seconds=settings.price_tick_min_interval_seconds,
        trend_enabled=settings.price_trend_enabled,
        rng=random.Random(settings.price_simulator_seed),
    )
    return PriceFeedScheduler(simulator, interval_seconds=settings.price_tick_interval_seconds)


class AppContext:
    """
    Application context providing in-process access to all services.

    Used by embedding code and scripts to drive the ledger without going
    through HTTP/FastAPI.
    """

    def __init__(self, data_dir: Optional[Path] = None, on_unlock: Optional[UnlockCallback] = None):
        self._data_dir = data_dir
        self._on_unlock = on_unlock
        self._sessions: Optional[scoped_session] = None
        self._local = threading.local()
        self._initialized = False
        self._locks: Optional[AccountLockRegistry] = None
        self._price_feed: Optional[PriceFeedScheduler] = None

    def initialize(self, data_dir: Optional[Path] = None, settings: Optional[Settings] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Creates the tables and seeds the instrument catalog.
        """
        self.stop_price_feed()
        if data_dir:
            self._data_dir = data_dir

        settings = settings or Settings(data_dir=self._data_dir)
        set_settings(settings)

        reset_database()
        db_path = settings.get_data_dir() / "tradesim.db"
        init_db_with_path(db_path)
        seed_catalog(get_session_factory())

        self.close()
        self._locks = AccountLockRegistry(timeout_seconds=settings.lock_timeout_seconds)
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    def _get_session(self) -> Session:
        """Session of the calling thread."""
        if self._sessions is None:
            self._sessions = scoped_session(get_session_factory())
        return self._sessions()

    @property
    def locks(self) -> AccountLockRegistry:
        if self._locks is None:
            self._locks = AccountLockRegistry(timeout_seconds=get_settings().lock_timeout_seconds)
        return self._locks

    @property
    def catalog(self) -> InstrumentCatalog:
        return InstrumentCatalog(SqlAlchemyInstrumentRepository(self._get_session()))

    @property
    def ledger(self) -> LedgerService:
        """
        Get the calling thread's LedgerService.

        Each thread works on its own session; only the account lock registry
        is shared, so orders from different threads serialize per account.
        """
        ledger = getattr(self._local, "ledger", None)
        if ledger is None:
            session = self._get_session()
            ledger = LedgerService(
                session=session,
                account_repo=SqlAlchemyAccountRepository(session),
                holding_store=HoldingStore(SqlAlchemyHoldingRepository(session)),
                transaction_repo=SqlAlchemyTransactionRepository(session),
                transfer_repo=SqlAlchemyTransferRepository(session),
                catalog=self.catalog,
                game_score_repo=SqlAlchemyGameScoreRepository(session),
                achievement_evaluator=AchievementEvaluator(SqlAlchemyAchievementRepository(session)),
                locks=self.locks,
                risk_scorer=RiskScorer(),
                initial_cash=get_settings().initial_cash_balance,
                on_unlock=self._on_unlock,
            )
            self._local.ledger = ledger
        return ledger

    def release_thread(self) -> None:
        """Close the calling thread's session; the next access opens a new one."""
        if self._sessions is not None:
            self._sessions.remove()
        self._local.ledger = None

    # Price feed lifecycle
    def start_price_feed(self) -> PriceFeedScheduler:
        """Start the background price feed if it is not running."""
        if self._price_feed is None or not self._price_feed.is_alive():
            self._price_feed = create_price_feed(get_settings(), get_session_factory())
            self._price_feed.start()
        return self._price_feed

    def stop_price_feed(self) -> None:
        if self._price_feed is not None:
            self._price_feed.stop()
            self._price_feed = None

    def close(self) -> None:
        """Clean up resources."""
        self.stop_price_feed()
        if self._sessions is not None:
            self._sessions.remove()
            self._sessions = None
        self._local = threading.local()


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
