"""Transaction log and transfer repository protocols."""

from datetime import datetime
from typing import Protocol, Optional

from tradesim.domain.models import Transaction, FundTransfer


class TransactionRepository(Protocol):
    """Append-only transaction log."""

    def append(self, transaction: Transaction) -> Transaction:
        """Append an executed order to the log."""
        ...

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def list_by_account(
        self,
        account_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
        newest_first: bool = False,
    ) -> list[Transaction]:
        """List transactions for an account ordered by txn_time_est."""
        ...

    def count_by_account(self, account_id: str) -> int:
        """Number of executed orders for an account."""
        ...


class TransferRepository(Protocol):
    """Append-only cash/savings transfer log."""

    def append(self, transfer: FundTransfer) -> FundTransfer:
        """Append a transfer record."""
        ...

    def list_by_account(self, account_id: str) -> list[FundTransfer]:
        """List transfers for an account, newest first."""
        ...
