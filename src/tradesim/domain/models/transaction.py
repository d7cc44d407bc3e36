"""Transaction and FundTransfer domain models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import TransactionType, TransferDirection


@dataclass(frozen=True)
class Transaction:
    """
    Executed market order (append-only log entry).

    total is always shares * price; the log ordered by txn_time_est is the
    system of record for history and achievement counting.
    """

    txn_id: str
    account_id: str
    symbol: str
    txn_type: TransactionType
    shares: int
    price: Decimal
    total: Decimal
    txn_time_est: datetime

    @property
    def net_cash_impact(self) -> Decimal:
        """Positive = cash added, negative = cash removed."""
        if self.txn_type == TransactionType.BUY:
            return -self.total
        return self.total


@dataclass(frozen=True)
class FundTransfer:
    """Movement between an account's cash and savings balances."""

    transfer_id: str
    account_id: str
    direction: TransferDirection
    amount: Decimal
    transfer_time_est: datetime
    description: Optional[str] = None
