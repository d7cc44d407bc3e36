"""Core utilities and shared functionality."""

from tradesim.core.timezone import (
    now_eastern,
    to_eastern,
    parse_datetime_eastern,
    EASTERN_TZ,
)
from tradesim.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InvalidQuantityError,
    InsufficientFundsError,
    InsufficientSharesError,
    InsufficientBalanceError,
    InstrumentUnavailableError,
    IncompleteAssessmentError,
    PersistenceFailureError,
    LockTimeoutError,
    InvariantViolationError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_datetime_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InvalidQuantityError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "InsufficientBalanceError",
    "InstrumentUnavailableError",
    "IncompleteAssessmentError",
    "PersistenceFailureError",
    "LockTimeoutError",
    "InvariantViolationError",
]
