"""
API tests for account, snapshot, transfer and instrument endpoints.

Tests cover:
- Create account (success + validation errors)
- List accounts and get a single account
- Snapshot valuation
- Cash/savings transfers
- Instrument catalog
- Error responses (400, 404, 422)
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


def _create(client: TestClient, name: str = "Trader") -> str:
    response = client.post("/accounts/", json={"name": name})
    assert response.status_code == 201
    return response.json()["account_id"]


# =============================================================================
# CREATE ACCOUNT TESTS
# =============================================================================


class TestCreateAccountAPI:
    """Tests for POST /accounts endpoint."""

    def test_create_account_success(self, client: TestClient):
        """
        GIVEN no accounts exist
        WHEN I POST /accounts with a name
        THEN response is 201 with the starting balances
        """
        response = client.post("/accounts/", json={"name": "Trader"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Trader"
        assert data["account_id"]
        assert Decimal(data["cash_balance"]) == Decimal("10000")
        assert Decimal(data["savings_balance"]) == Decimal("0")
        assert Decimal(data["initial_cash"]) == Decimal("10000")
        assert data["risk_profile"] is None

    def test_create_account_duplicate_name_returns_400(self, client: TestClient):
        """
        GIVEN an account named "Trader" exists
        WHEN I POST /accounts with the same name
        THEN response is 400 with a VALIDATION_ERROR body
        """
        _create(client)

        response = client.post("/accounts/", json={"name": "Trader"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_create_account_blank_name_returns_400(self, client: TestClient):
        response = client.post("/accounts/", json={"name": "   "})

        assert response.status_code == 400

    def test_create_account_missing_name_returns_422(self, client: TestClient):
        response = client.post("/accounts/", json={})

        assert response.status_code == 422


# =============================================================================
# GET / LIST ACCOUNT TESTS
# =============================================================================


class TestGetAccountAPI:
    """Tests for GET /accounts endpoints."""

    def test_list_accounts(self, client: TestClient):
        _create(client, "Beta")
        _create(client, "Alpha")

        response = client.get("/accounts/")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [a["name"] for a in data["accounts"]] == ["Alpha", "Beta"]

    def test_get_account(self, client: TestClient):
        account_id = _create(client)

        response = client.get(f"/accounts/{account_id}")

        assert response.status_code == 200
        assert response.json()["account_id"] == account_id

    def test_get_unknown_account_returns_404(self, client: TestClient):
        response = client.get("/accounts/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "NOT_FOUND"
        assert "does-not-exist" in data["message"]


# =============================================================================
# SNAPSHOT TESTS
# =============================================================================


class TestSnapshotAPI:
    """Tests for GET /accounts/{id}/snapshot."""

    def test_snapshot_of_new_account(self, client: TestClient):
        account_id = _create(client)

        response = client.get(f"/accounts/{account_id}/snapshot")

        assert response.status_code == 200
        data = response.json()
        assert data["holdings"] == []
        assert Decimal(data["total_value"]) == Decimal("10000")
        assert Decimal(data["total_gain_loss"]) == Decimal("0")

    def test_snapshot_values_holdings_at_current_price(self, client: TestClient, set_api_price):
        """
        GIVEN 10 AAPL bought at 180
        WHEN the price moves to 200
        THEN the snapshot shows a 200 gain on the holding and on the account
        """
        account_id = _create(client)
        client.post(f"/accounts/{account_id}/buy", json={"symbol": "AAPL", "shares": 10})
        set_api_price("AAPL", "200")

        data = client.get(f"/accounts/{account_id}/snapshot").json()

        holding = data["holdings"][0]
        assert holding["symbol"] == "AAPL"
        assert Decimal(holding["current_value"]) == Decimal("2000")
        assert Decimal(holding["gain_loss"]) == Decimal("200")
        assert Decimal(holding["gain_loss_percent"]) == Decimal("11.11")
        assert holding["price_available"] is True
        assert Decimal(data["cash_balance"]) == Decimal("8200")
        assert Decimal(data["total_value"]) == Decimal("10200")
        assert Decimal(data["total_gain_loss_percent"]) == Decimal("2.00")

    def test_snapshot_unknown_account_returns_404(self, client: TestClient):
        assert client.get("/accounts/nope/snapshot").status_code == 404


# =============================================================================
# TRANSFER TESTS
# =============================================================================


class TestTransferAPI:
    """Tests for /accounts/{id}/transfers."""

    def test_transfer_to_savings_and_back(self, client: TestClient):
        account_id = _create(client)

        response = client.post(
            f"/accounts/{account_id}/transfers",
            json={"direction": "CASH_TO_SAVINGS", "amount": "2500", "description": "Emergency fund"},
        )
        assert response.status_code == 201
        assert response.json()["direction"] == "CASH_TO_SAVINGS"

        client.post(
            f"/accounts/{account_id}/transfers",
            json={"direction": "SAVINGS_TO_CASH", "amount": "500.25"},
        )

        account = client.get(f"/accounts/{account_id}").json()
        assert Decimal(account["cash_balance"]) == Decimal("8000.25")
        assert Decimal(account["savings_balance"]) == Decimal("1999.75")

        history = client.get(f"/accounts/{account_id}/transfers").json()
        assert history["count"] == 2
        assert history["transfers"][0]["direction"] == "SAVINGS_TO_CASH"

    def test_transfer_more_than_balance_returns_400(self, client: TestClient):
        """
        GIVEN an account with no savings
        WHEN I move 1 from savings to cash
        THEN response is 400 INSUFFICIENT_BALANCE and balances are unchanged
        """
        account_id = _create(client)

        response = client.post(
            f"/accounts/{account_id}/transfers",
            json={"direction": "SAVINGS_TO_CASH", "amount": "1"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_BALANCE"
        account = client.get(f"/accounts/{account_id}").json()
        assert Decimal(account["cash_balance"]) == Decimal("10000")

    @pytest.mark.parametrize("amount", ["0", "-5", "0.00001"])
    def test_invalid_amount_returns_400(self, client: TestClient, amount):
        account_id = _create(client)

        response = client.post(
            f"/accounts/{account_id}/transfers",
            json={"direction": "CASH_TO_SAVINGS", "amount": amount},
        )

        assert response.status_code == 400

    def test_unknown_direction_returns_422(self, client: TestClient):
        account_id = _create(client)

        response = client.post(
            f"/accounts/{account_id}/transfers",
            json={"direction": "SIDEWAYS", "amount": "10"},
        )

        assert response.status_code == 422


# =============================================================================
# INSTRUMENT TESTS
# =============================================================================


class TestInstrumentAPI:
    """Tests for /instruments."""

    def test_list_seeded_catalog(self, client: TestClient):
        data = client.get("/instruments/").json()

        symbols = [i["symbol"] for i in data["instruments"]]
        assert data["count"] == len(symbols)
        assert {"AAPL", "BND", "TSLA", "BTC"} <= set(symbols)

    def test_get_instrument_case_insensitive(self, client: TestClient):
        response = client.get("/instruments/aapl")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert Decimal(data["current_price"]) == Decimal("180")
        assert data["volatility_class"] == "MEDIUM"

    def test_unknown_instrument_returns_404(self, client: TestClient):
        response = client.get("/instruments/NOPE")

        assert response.status_code == 404
        assert response.json()["error"] == "INSTRUMENT_UNAVAILABLE"


class TestHealthAPI:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}
