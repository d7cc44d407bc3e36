"""
Pytest configuration and fixtures for trading simulator ledger tests.

This module provides:
- In-memory SQLite database fixtures
- A file-backed SQLite database for multi-threaded tests
- A deterministic instrument catalog
- Factory helpers for accounts and questionnaire answers
- Time helpers for Eastern timezone
- Service and repository fixtures
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from tradesim.main import app
from tradesim.api.deps import reset_lock_registry
from tradesim.repositories.sqlalchemy.database import Base, get_session, reset_database
# Import ORM models to register them with Base before creating tables
from tradesim.repositories.sqlalchemy import orm_models  # noqa: F401
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
    RiskScorer,
)
from tradesim.domain.models import (
    Account,
    AssetType,
    Instrument,
    RiskProfile,
    VolatilityClass,
)
from tradesim.domain.views import AccountSnapshot, HoldingView, RiskAnswer
from tradesim.core.timezone import EASTERN_TZ
from tradesim.config.settings import Settings, set_settings, reset_settings


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# CATALOG DATA
# =============================================================================

# symbol -> (price, volatility, risk category, asset type)
TEST_INSTRUMENTS = {
    "AAPL": ("100", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "MSFT": ("200", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "GOOGL": ("40", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "SPY": ("25", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.ETF),
    "BND": ("50", VolatilityClass.LOW, RiskProfile.CONSERVATIVE, AssetType.BOND),
    "TSLA": ("250", VolatilityClass.HIGH, RiskProfile.AGGRESSIVE, AssetType.STOCK),
    "GOLD": ("2000", VolatilityClass.COMMODITY, RiskProfile.MODERATE, AssetType.COMMODITY),
}


def seed_test_instruments(session: Session) -> None:
    """Insert the deterministic test catalog and commit."""
    repo = SqlAlchemyInstrumentRepository(session)
    for symbol, (price, volatility, risk, asset_type) in TEST_INSTRUMENTS.items():
        repo.upsert(
            Instrument(
                symbol=symbol,
                name=f"{symbol} Test Instrument",
                current_price=Decimal(price),
                volatility_class=volatility,
                risk_category=risk,
                asset_type=asset_type,
            )
        )
    session.commit()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session with the test catalog loaded."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    seed_test_instruments(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def file_session_factory(tmp_path) -> sessionmaker:
    """
    Session factory over a file-backed SQLite database.

    Each thread in a concurrency test opens its own session from this factory.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    try:
        seed_test_instruments(session)
    finally:
        session.close()
    yield SessionLocal
    engine.dispose()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def transfer_repo(test_session) -> SqlAlchemyTransferRepository:
    """Provide test TransferRepository."""
    return SqlAlchemyTransferRepository(test_session)


@pytest.fixture
def instrument_repo(test_session) -> SqlAlchemyInstrumentRepository:
    """Provide test InstrumentRepository."""
    return SqlAlchemyInstrumentRepository(test_session)


@pytest.fixture
def achievement_repo(test_session) -> SqlAlchemyAchievementRepository:
    """Provide test AchievementRepository."""
    return SqlAlchemyAchievementRepository(test_session)


@pytest.fixture
def game_score_repo(test_session) -> SqlAlchemyGameScoreRepository:
    """Provide test GameScoreRepository."""
    return SqlAlchemyGameScoreRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def catalog(instrument_repo) -> InstrumentCatalog:
    """Provide the deterministic test catalog."""
    return InstrumentCatalog(instrument_repo)


@pytest.fixture
def set_price(catalog, test_session) -> Callable[[str, str], Instrument]:
    """Set an instrument's price and commit, as the price feed would."""

    def _set_price(symbol: str, price: str) -> Instrument:
        instrument = catalog.update_price(symbol, Decimal(price))
        test_session.commit()
        return instrument

    return _set_price


@pytest.fixture
def holding_store(holding_repo) -> HoldingStore:
    """Provide test HoldingStore."""
    return HoldingStore(holding_repo)


@pytest.fixture
def lock_registry() -> AccountLockRegistry:
    """Provide a fresh lock registry."""
    return AccountLockRegistry(timeout_seconds=2.0)


@pytest.fixture
def achievement_evaluator(achievement_repo) -> AchievementEvaluator:
    """Provide test AchievementEvaluator."""
    return AchievementEvaluator(achievement_repo)


@pytest.fixture
def risk_scorer() -> RiskScorer:
    """Provide RiskScorer."""
    return RiskScorer()


def build_ledger(
    session: Session,
    locks: AccountLockRegistry,
    initial_cash: Decimal = Decimal("10000"),
    on_unlock=None,
) -> LedgerService:
    """Wire a LedgerService over a session, the way the API does per request."""
    return LedgerService(
        session=session,
        account_repo=SqlAlchemyAccountRepository(session),
        holding_store=HoldingStore(SqlAlchemyHoldingRepository(session)),
        transaction_repo=SqlAlchemyTransactionRepository(session),
        transfer_repo=SqlAlchemyTransferRepository(session),
        catalog=InstrumentCatalog(SqlAlchemyInstrumentRepository(session)),
        game_score_repo=SqlAlchemyGameScoreRepository(session),
        achievement_evaluator=AchievementEvaluator(SqlAlchemyAchievementRepository(session)),
        locks=locks,
        risk_scorer=RiskScorer(),
        initial_cash=initial_cash,
        on_unlock=on_unlock,
    )


@pytest.fixture
def ledger_service(test_session, lock_registry) -> LedgerService:
    """Provide test LedgerService seeded with $10,000 per account."""
    return build_ledger(test_session, lock_registry)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(ledger_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(name: Optional[str] = None) -> Account:
        if name is None:
            name = f"Test Account {uuid.uuid4().hex[:8]}"
        return ledger_service.create_account(name=name)

    return _create_account


@pytest.fixture
def sample_account(account_factory) -> Account:
    """Create a sample account with the default $10,000 cash."""
    return account_factory(name="Trader")


def risk_answers(**scores: int) -> list[RiskAnswer]:
    """
    Build a complete answer set, every question at 1 unless overridden.

    The all-ones questionnaire totals 7.
    """
    question_ids = [
        "investment_goal",
        "risk_comfort",
        "time_horizon",
        "income_stability",
        "emergency_fund",
        "investment_experience",
        "market_reaction",
    ]
    return [RiskAnswer(question_id=q, selected_score=scores.get(q, 1)) for q in question_ids]


def make_snapshot(
    holdings: int = 0,
    total_value: str = "10000",
    total_gain_loss: str = "0",
    account_id: str = "acct-1",
) -> AccountSnapshot:
    """Build a synthetic snapshot for rule evaluation."""
    views = [
        HoldingView(
            symbol=f"SYM{i}",
            shares=1,
            avg_cost=Decimal("10"),
            current_price=Decimal("10"),
            current_value=Decimal("10"),
            invested=Decimal("10"),
            gain_loss=Decimal("0"),
            gain_loss_percent=Decimal("0"),
        )
        for i in range(holdings)
    ]
    return AccountSnapshot(
        account_id=account_id,
        cash_balance=Decimal("0"),
        savings_balance=Decimal("0"),
        initial_cash=Decimal("10000"),
        holdings=views,
        total_value=Decimal(total_value),
        total_gain_loss=Decimal(total_gain_loss),
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(tmp_path) -> TestClient:
    """Provide FastAPI test client over a temp-file database, price feed off."""
    set_settings(
        Settings(
            data_dir=tmp_path,
            database_url=f"sqlite:///{tmp_path / 'api.db'}",
            price_simulator_enabled=False,
        )
    )
    reset_database()
    reset_lock_registry()
    with TestClient(app) as c:
        yield c
    reset_database()
    reset_lock_registry()
    reset_settings()


@pytest.fixture
def set_api_price(client) -> Callable[[str, str], None]:
    """Set a catalog price in the API test database."""

    def _set_price(symbol: str, price: str) -> None:
        session = get_session()
        try:
            InstrumentCatalog(SqlAlchemyInstrumentRepository(session)).update_price(symbol, Decimal(price))
            session.commit()
        finally:
            session.close()

    return _set_price


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
