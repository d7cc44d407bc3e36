"""Holding store: the single mutation primitive for cost-basis positions."""

import logging
from decimal import Decimal
from typing import Optional

from tradesim.core.exceptions import InvariantViolationError, ValidationError
from tradesim.core.money import quantize_cost
from tradesim.core.timezone import now_eastern
from tradesim.domain.models import Holding
from tradesim.repositories.protocols import HoldingRepository

logger = logging.getLogger(__name__)


class HoldingStore:
    """
    Map of (account_id, symbol) -> Holding.

    Only the ledger calls apply_lot. A buy lot adds its exact cost to
    cost_basis and avg_cost is re-derived from that total, so the result does
    not depend on lot order. A sell lot only reduces shares and never touches
    avg_cost.
    """

    def __init__(self, holding_repo: HoldingRepository):
        self._holding_repo = holding_repo

    def get(self, account_id: str, symbol: str) -> Optional[Holding]:
        return self._holding_repo.get(account_id, symbol)

    def list_for_account(self, account_id: str) -> list[Holding]:
        return self._holding_repo.list_by_account(account_id)

    def apply_lot(
        self,
        account_id: str,
        symbol: str,
        delta_shares: int,
        lot_price: Decimal,
    ) -> Optional[Holding]:
        """
        Apply a lot to the position and return the resulting holding.

        Returns None when the position is closed (shares reached zero).
        Raises InvariantViolationError if the result would be negative.
        """
        if delta_shares == 0:
            raise ValidationError("Lot must change the share count")

        existing = self._holding_repo.get(account_id, symbol)
        old_shares = existing.shares if existing else 0
        new_shares = old_shares + delta_shares
        now = now_eastern()

        if new_shares < 0:
            logger.critical(
                "Holding invariant violated: %s/%s has %d shares, lot %d",
                account_id, symbol, old_shares, delta_shares,
            )
            raise InvariantViolationError(
                f"Holding {symbol} for account {account_id} would go negative "
                f"({old_shares} {delta_shares:+d})"
            )

        if delta_shares < 0:
            if new_shares == 0:
                self._holding_repo.delete(account_id, symbol)
                return None
            existing.shares = new_shares
            existing.cost_basis = existing.avg_cost * new_shares
            existing.updated_at_est = now
            return self._holding_repo.upsert(existing)

        lot_cost = lot_price * delta_shares
        if existing is None:
            holding = Holding(
                account_id=account_id,
                symbol=symbol,
                shares=new_shares,
                avg_cost=average_cost(lot_cost, new_shares),
                cost_basis=lot_cost,
                created_at_est=now,
                updated_at_est=now,
            )
            return self._holding_repo.upsert(holding)

        existing.cost_basis = existing.cost_basis + lot_cost
        existing.shares = new_shares
        existing.avg_cost = average_cost(existing.cost_basis, new_shares)
        existing.updated_at_est = now
        return self._holding_repo.upsert(existing)


def average_cost(cost_basis: Decimal, shares: int) -> Decimal:
    """Per-share cost of a position, rounded half-even to 8 places."""
    return quantize_cost(cost_basis / shares)
