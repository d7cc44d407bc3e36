"""Pydantic schemas for cash/savings transfer endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from tradesim.domain.models.enums import TransferDirection


class TransferRequest(BaseModel):
    """Request schema for moving money between cash and savings."""

    direction: TransferDirection
    amount: Decimal = Field(..., description="Amount to move (> 0)")
    description: Optional[str] = Field(default=None, max_length=255)


class TransferResponse(BaseModel):
    """Response schema for a single transfer."""

    model_config = {"from_attributes": True}

    transfer_id: str
    account_id: str
    direction: TransferDirection
    amount: Decimal
    transfer_time_est: datetime
    description: Optional[str] = None


class TransferListResponse(BaseModel):
    """Response schema for transfer history."""

    transfers: list[TransferResponse]
    count: int
