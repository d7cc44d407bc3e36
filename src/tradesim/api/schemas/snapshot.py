"""Pydantic schemas for the account snapshot endpoint."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """Response schema for a single valued holding."""

    model_config = {"from_attributes": True}

    symbol: str
    shares: int
    avg_cost: Decimal
    current_price: Decimal
    current_value: Decimal
    invested: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    price_change: Decimal
    price_change_percent: Decimal
    price_available: bool


class SnapshotResponse(BaseModel):
    """Response schema for an account valuation."""

    model_config = {"from_attributes": True}

    account_id: str
    cash_balance: Decimal
    savings_balance: Decimal
    initial_cash: Decimal
    holdings: list[HoldingResponse]
    total_value: Decimal
    total_invested: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    as_of: Optional[datetime] = None
