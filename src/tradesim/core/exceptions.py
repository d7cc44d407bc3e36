"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 400
    retryable: bool = False

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InvalidQuantityError(ValidationError):
    """Raised when an order quantity is not a positive whole number of shares."""

    def __init__(self, quantity: object):
        super().__init__(
            f"Invalid quantity: {quantity!r} (must be a whole number of shares > 0)",
            code="INVALID_QUANTITY",
        )


class InsufficientFundsError(AppError):
    """Raised when a buy order costs more than the available cash."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: order total {requested}, available cash {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class InsufficientBalanceError(AppError):
    """Raised when a transfer source cannot cover the amount."""

    def __init__(self, source: str, requested: str, available: str):
        super().__init__(
            f"Insufficient {source} balance: requested {requested}, available {available}",
            code="INSUFFICIENT_BALANCE",
        )


class InstrumentUnavailableError(AppError):
    """Raised when the catalog has no price for a symbol."""

    status_code = 404

    def __init__(self, symbol: str):
        super().__init__(f"Instrument unavailable: {symbol}", code="INSTRUMENT_UNAVAILABLE")


class IncompleteAssessmentError(AppError):
    """Raised when a risk questionnaire is missing answers."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Incomplete risk assessment: missing answers for {', '.join(missing)}",
            code="INCOMPLETE_ASSESSMENT",
        )


class PersistenceFailureError(AppError):
    """Raised when the durable store rejects a commit. Safe to retry."""

    status_code = 503
    retryable = True

    def __init__(self, operation: str, detail: str = ""):
        message = f"Could not persist {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code="PERSISTENCE_FAILURE")


class LockTimeoutError(AppError):
    """Raised when the per-account lock cannot be acquired in time. Safe to retry."""

    status_code = 503
    retryable = True

    def __init__(self, account_id: str, timeout: float):
        super().__init__(
            f"Timed out after {timeout:g}s waiting for account {account_id}",
            code="TIMEOUT",
        )


class InvariantViolationError(AppError):
    """Internal consistency failure. Indicates a bug upstream; never handled locally."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="INVARIANT_VIOLATION")
