"""Instrument domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import AssetType, RiskProfile, VolatilityClass


@dataclass
class Instrument:
    """Tradable instrument with its current simulated price."""

    symbol: str
    name: str
    current_price: Decimal
    volatility_class: VolatilityClass = VolatilityClass.MEDIUM
    risk_category: RiskProfile = RiskProfile.MODERATE
    asset_type: AssetType = AssetType.STOCK
    price_change: Decimal = field(default_factory=lambda: Decimal("0"))
    price_change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    is_active: bool = True
    updated_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.volatility_class, str):
            self.volatility_class = VolatilityClass(self.volatility_class)
        if isinstance(self.risk_category, str):
            self.risk_category = RiskProfile(self.risk_category)
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)
