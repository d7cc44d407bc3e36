"""Pydantic schemas for order endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tradesim.domain.models.enums import TransactionType


class OrderRequest(BaseModel):
    """Request schema for a market buy or sell."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Instrument symbol")
    # Whole shares only; the ledger rejects anything else with INVALID_QUANTITY
    shares: int = Field(..., description="Number of shares (whole number > 0)")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Response schema for a single executed order."""

    model_config = {"from_attributes": True}

    txn_id: str
    account_id: str
    symbol: str
    txn_type: TransactionType
    shares: int
    price: Decimal
    total: Decimal
    txn_time_est: datetime


class TransactionListResponse(BaseModel):
    """Response schema for order history."""

    transactions: list[TransactionResponse]
    count: int
