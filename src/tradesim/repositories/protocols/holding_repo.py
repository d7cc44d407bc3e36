"""Holding repository protocol."""

from typing import Protocol, Optional

from tradesim.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access, keyed by (account_id, symbol)."""

    def get(self, account_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol, if any."""
        ...

    def list_by_account(self, account_id: str) -> list[Holding]:
        """List all holdings for an account, ordered by symbol."""
        ...

    def upsert(self, holding: Holding) -> Holding:
        """Insert or replace a holding."""
        ...

    def delete(self, account_id: str, symbol: str) -> None:
        """Remove a holding."""
        ...
