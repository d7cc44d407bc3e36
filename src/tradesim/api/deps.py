"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from tradesim.config.settings import get_settings
from tradesim.repositories.sqlalchemy.database import get_db
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

# Shared by every request so that mutations of one account are serialized
_lock_registry: Optional[AccountLockRegistry] = None


def get_lock_registry() -> AccountLockRegistry:
    """Provide the process-wide AccountLockRegistry."""
    global _lock_registry
    if _lock_registry is None:
        _lock_registry = AccountLockRegistry(timeout_seconds=get_settings().lock_timeout_seconds)
    return _lock_registry


def reset_lock_registry() -> None:
    """Drop the shared registry (used when settings change)."""
    global _lock_registry
    _lock_registry = None


def get_account_repo(db: Session = Depends(get_db)) -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(db)


def get_instrument_catalog(db: Session = Depends(get_db)) -> InstrumentCatalog:
    """Provide InstrumentCatalog instance."""
    return InstrumentCatalog(SqlAlchemyInstrumentRepository(db))


def get_risk_scorer() -> RiskScorer:
    """Provide RiskScorer instance."""
    return RiskScorer()


def get_ledger_service(
    db: Session = Depends(get_db),
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    catalog: InstrumentCatalog = Depends(get_instrument_catalog),
    risk_scorer: RiskScorer = Depends(get_risk_scorer),
    locks: AccountLockRegistry = Depends(get_lock_registry),
) -> LedgerService:
    """Provide LedgerService instance."""
    settings = get_settings()
    return LedgerService(
        session=db,
        account_repo=account_repo,
        holding_store=HoldingStore(SqlAlchemyHoldingRepository(db)),
        transaction_repo=SqlAlchemyTransactionRepository(db),
        transfer_repo=SqlAlchemyTransferRepository(db),
        catalog=catalog,
        game_score_repo=SqlAlchemyGameScoreRepository(db),
        achievement_evaluator=AchievementEvaluator(SqlAlchemyAchievementRepository(db)),
        locks=locks,
        risk_scorer=risk_scorer,
        initial_cash=settings.initial_cash_balance,
    )
