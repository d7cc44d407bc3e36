"""Pydantic schemas for instrument catalog endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from tradesim.domain.models.enums import AssetType, RiskProfile, VolatilityClass


class InstrumentResponse(BaseModel):
    """Response schema for a single instrument."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    current_price: Decimal
    volatility_class: VolatilityClass
    risk_category: RiskProfile
    asset_type: AssetType
    price_change: Decimal
    price_change_percent: Decimal
    updated_at_est: Optional[datetime] = None


class InstrumentListResponse(BaseModel):
    """Response schema for the catalog listing."""

    instruments: list[InstrumentResponse]
    count: int
