"""
Unit tests for HoldingStore.

Tests cover:
- Creating a holding from the first buy lot
- Weighted-average cost on additional buys
- Average cost independent of lot order
- Sell lots reduce shares without touching avg_cost
- Closing a position at zero
- Invariant violations and rejected lots
"""

from decimal import Decimal
from itertools import permutations

import pytest

from tradesim.core.money import quantize_cost
from tradesim.services import HoldingStore, average_cost
from tradesim.core.exceptions import InvariantViolationError, ValidationError


# =============================================================================
# BUY LOT TESTS
# =============================================================================


class TestApplyBuyLot:
    """Tests for positive lots."""

    def test_first_lot_creates_holding_at_lot_price(self, holding_store: HoldingStore):
        """
        GIVEN no AAPL holding
        WHEN a lot of 10 @ 100 is applied
        THEN a holding of 10 shares with avg_cost 100 exists
        """
        holding = holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("100"))

        assert holding.shares == 10
        assert holding.avg_cost == Decimal("100")
        assert holding_store.get("acct-1", "AAPL").shares == 10

    def test_second_lot_uses_weighted_average(self, holding_store: HoldingStore):
        """
        GIVEN 10 shares @ 100
        WHEN a lot of 10 @ 120 is applied
        THEN the holding has 20 shares @ 110
        """
        holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("100"))
        holding = holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("120"))

        assert holding.shares == 20
        assert holding.avg_cost == Decimal("110")

    def test_lot_order_does_not_change_average(self, holding_store: HoldingStore):
        """
        GIVEN two accounts receiving the same lots in opposite order
        WHEN both sequences are applied
        THEN the resulting avg_cost is the same
        """
        holding_store.apply_lot("acct-a", "MSFT", 4, Decimal("50"))
        holding_store.apply_lot("acct-a", "MSFT", 6, Decimal("100"))
        holding_store.apply_lot("acct-b", "MSFT", 6, Decimal("100"))
        holding_store.apply_lot("acct-b", "MSFT", 4, Decimal("50"))

        a = holding_store.get("acct-a", "MSFT")
        b = holding_store.get("acct-b", "MSFT")
        assert a.avg_cost == b.avg_cost == Decimal("80")


# =============================================================================
# SELL LOT TESTS
# =============================================================================


class TestApplySellLot:
    """Tests for negative lots."""

    def test_partial_sell_keeps_avg_cost(self, holding_store: HoldingStore):
        """
        GIVEN 20 shares @ 110
        WHEN 5 shares are sold at 200
        THEN 15 shares remain and avg_cost is still 110
        """
        holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("100"))
        holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("120"))

        holding = holding_store.apply_lot("acct-1", "AAPL", -5, Decimal("200"))

        assert holding.shares == 15
        assert holding.avg_cost == Decimal("110")

    def test_selling_all_shares_removes_holding(self, holding_store: HoldingStore):
        """
        GIVEN 10 shares
        WHEN all 10 are sold
        THEN apply_lot returns None and the holding is gone
        """
        holding_store.apply_lot("acct-1", "AAPL", 10, Decimal("100"))

        result = holding_store.apply_lot("acct-1", "AAPL", -10, Decimal("90"))

        assert result is None
        assert holding_store.get("acct-1", "AAPL") is None
        assert holding_store.list_for_account("acct-1") == []

    def test_overselling_raises_invariant_violation(self, holding_store: HoldingStore):
        """
        GIVEN 5 shares
        WHEN a lot of -6 is applied
        THEN InvariantViolationError is raised and the holding is unchanged
        """
        holding_store.apply_lot("acct-1", "AAPL", 5, Decimal("100"))

        with pytest.raises(InvariantViolationError):
            holding_store.apply_lot("acct-1", "AAPL", -6, Decimal("100"))

        assert holding_store.get("acct-1", "AAPL").shares == 5

    def test_zero_lot_is_rejected(self, holding_store: HoldingStore):
        """
        GIVEN any holding state
        WHEN a lot of 0 shares is applied
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError):
            holding_store.apply_lot("acct-1", "AAPL", 0, Decimal("100"))


# =============================================================================
# AVERAGE COST TESTS
# =============================================================================


class TestAverageCost:
    """Tests for the average_cost helper."""

    def test_average_of_round_total(self):
        assert average_cost(Decimal("2200"), 20) == Decimal("110")

    def test_average_is_rounded_to_eight_places(self):
        """
        GIVEN a cost basis of 5 over 3 shares
        WHEN averaged
        THEN the result is 5/3 rounded half-even to 8 places
        """
        assert average_cost(Decimal("5"), 3) == Decimal("1.66666667")


class TestLotOrderIndependence:
    """The average cost of a position does not depend on the order of its buys."""

    LOTS = [
        (18, Decimal("238.7514")),
        (9, Decimal("106.9937")),
        (16, Decimal("207.8105")),
        (58, Decimal("198.084")),
        (84, Decimal("159.2321")),
    ]

    def test_every_ordering_matches_closed_form(self, holding_store: HoldingStore):
        """
        GIVEN five buy lots whose running averages do not terminate
        WHEN they are applied in every possible order, one account per order
        THEN every account ends at sum(q*p)/sum(q) rounded to 8 places
        """
        total_cost = sum(q * p for q, p in self.LOTS)
        total_shares = sum(q for q, _ in self.LOTS)
        expected = quantize_cost(total_cost / total_shares)
        assert expected == Decimal("180.80975622")

        for index, ordering in enumerate(permutations(self.LOTS)):
            account_id = f"acct-{index}"
            for shares, price in ordering:
                holding_store.apply_lot(account_id, "MIX", shares, price)

            holding = holding_store.get(account_id, "MIX")
            assert holding.shares == total_shares
            assert holding.avg_cost == expected, ordering
            assert holding.cost_basis == total_cost

    def test_sell_rebases_cost_basis_at_avg_cost(self, holding_store: HoldingStore):
        """
        GIVEN 1 share @ 1 and 2 shares @ 2 (avg 1.66666667)
        WHEN 1 share is sold and 1 more is bought @ 2
        THEN the remaining basis is avg_cost * 2 and the new average builds on it
        """
        holding_store.apply_lot("acct-1", "MIX", 1, Decimal("1"))
        holding_store.apply_lot("acct-1", "MIX", 2, Decimal("2"))

        after_sell = holding_store.apply_lot("acct-1", "MIX", -1, Decimal("5"))
        assert after_sell.avg_cost == Decimal("1.66666667")
        assert after_sell.cost_basis == Decimal("3.33333334")

        after_buy = holding_store.apply_lot("acct-1", "MIX", 1, Decimal("2"))
        assert after_buy.avg_cost == Decimal("1.77777778")
