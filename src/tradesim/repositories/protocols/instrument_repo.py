"""Instrument catalog repository protocol."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional

from tradesim.domain.models import Instrument


class InstrumentRepository(Protocol):
    """Interface for the instrument catalog."""

    def get(self, symbol: str) -> Optional[Instrument]:
        """Get an instrument by symbol."""
        ...

    def list_active(self) -> list[Instrument]:
        """List instruments open for trading, ordered by symbol."""
        ...

    def upsert(self, instrument: Instrument) -> Instrument:
        """Insert or replace an instrument."""
        ...

    def update_price(
        self,
        symbol: str,
        current_price: Decimal,
        price_change: Decimal,
        price_change_percent: Decimal,
        updated_at_est: datetime,
    ) -> None:
        """Replace the price fields of a single instrument."""
        ...
