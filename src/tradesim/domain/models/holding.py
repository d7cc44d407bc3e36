"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    An account's position in one instrument.

    cost_basis is the exact total paid for the shares held. avg_cost is
    derived from it (cost_basis / shares, 8 places) and only changes when a
    lot is bought; a sale re-bases cost_basis to avg_cost * remaining shares.
    """

    account_id: str
    symbol: str
    shares: int = 0
    avg_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    cost_basis: Optional[Decimal] = field(default=None)
    created_at_est: Optional[datetime] = field(default=None)
    updated_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self):
        if self.cost_basis is None:
            self.cost_basis = self.avg_cost * self.shares

    @property
    def invested(self) -> Decimal:
        """Cost basis of the whole position."""
        return self.cost_basis
