"""Service layer - business logic orchestration."""

from tradesim.services.account_locks import AccountLockRegistry
from tradesim.services.holding_store import HoldingStore, average_cost
from tradesim.services.instrument_catalog import InstrumentCatalog, DEFAULT_INSTRUMENTS
from tradesim.services.price_simulator import PriceSimulator, PriceFeedScheduler, simulate_move
from tradesim.services.achievement_evaluator import (
    AchievementEvaluator,
    ACHIEVEMENT_RULES,
    evaluate_rules,
)
from tradesim.services.risk_scorer import RiskScorer, RISK_QUESTIONS
from tradesim.services.ledger_service import LedgerService, validate_quantity

__all__ = [
    "AccountLockRegistry",
    "HoldingStore",
    "average_cost",
    "InstrumentCatalog",
    "DEFAULT_INSTRUMENTS",
    "PriceSimulator",
    "PriceFeedScheduler",
    "simulate_move",
    "AchievementEvaluator",
    "ACHIEVEMENT_RULES",
    "evaluate_rules",
    "RiskScorer",
    "RISK_QUESTIONS",
    "LedgerService",
    "validate_quantity",
]
