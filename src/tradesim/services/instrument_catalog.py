"""Instrument catalog: read access for the ledger, seeding for the app."""

import logging
from decimal import Decimal
from typing import Optional

from tradesim.core.exceptions import InstrumentUnavailableError
from tradesim.core.money import percent, quantize_price
from tradesim.core.timezone import now_eastern
from tradesim.domain.models import AssetType, Instrument, RiskProfile, VolatilityClass
from tradesim.repositories.protocols import InstrumentRepository

logger = logging.getLogger(__name__)


# symbol -> (name, base price, volatility, risk category, asset type)
DEFAULT_INSTRUMENTS: dict[str, tuple[str, str, VolatilityClass, RiskProfile, AssetType]] = {
    "AAPL": ("Apple Inc.", "180", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "MSFT": ("Microsoft Corporation", "380", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "TSLA": ("Tesla, Inc.", "250", VolatilityClass.HIGH, RiskProfile.AGGRESSIVE, AssetType.STOCK),
    "GOOGL": ("Alphabet Inc.", "140", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "AMZN": ("Amazon.com, Inc.", "150", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.STOCK),
    "SPY": ("SPDR S&P 500 ETF", "445", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.ETF),
    "VTI": ("Vanguard Total Stock Market ETF", "235", VolatilityClass.MEDIUM, RiskProfile.MODERATE, AssetType.ETF),
    "BND": ("Vanguard Total Bond Market ETF", "102", VolatilityClass.LOW, RiskProfile.CONSERVATIVE, AssetType.BOND),
    "GOLD": ("Gold", "2030", VolatilityClass.COMMODITY, RiskProfile.MODERATE, AssetType.COMMODITY),
    "SILVER": ("Silver", "24", VolatilityClass.COMMODITY, RiskProfile.MODERATE, AssetType.COMMODITY),
    "BTC": ("Bitcoin", "43000", VolatilityClass.HIGH, RiskProfile.AGGRESSIVE, AssetType.CRYPTO),
    "ETH": ("Ethereum", "2600", VolatilityClass.HIGH, RiskProfile.AGGRESSIVE, AssetType.CRYPTO),
}


class InstrumentCatalog:
    """
    Read-mostly view of tradable instruments.

    The ledger only reads prices from here. Prices move through the price
    simulator or an explicit update_price.
    """

    def __init__(self, instrument_repo: InstrumentRepository):
        self._instrument_repo = instrument_repo

    def get(self, symbol: str) -> Optional[Instrument]:
        return self._instrument_repo.get(symbol.upper())

    def get_price(self, symbol: str) -> Decimal:
        """Current price of an active instrument, or InstrumentUnavailableError."""
        instrument = self._instrument_repo.get(symbol.upper())
        if instrument is None or not instrument.is_active or instrument.current_price <= 0:
            raise InstrumentUnavailableError(symbol.upper())
        return instrument.current_price

    def list_active(self) -> list[Instrument]:
        return self._instrument_repo.list_active()

    def update_price(self, symbol: str, new_price: Decimal) -> Instrument:
        """Set an instrument's price directly, deriving the change fields."""
        symbol = symbol.upper()
        instrument = self._instrument_repo.get(symbol)
        if instrument is None:
            raise InstrumentUnavailableError(symbol)
        new_price = quantize_price(new_price)
        change = new_price - instrument.current_price
        now = now_eastern()
        self._instrument_repo.update_price(
            symbol=symbol,
            current_price=new_price,
            price_change=change,
            price_change_percent=percent(change, instrument.current_price),
            updated_at_est=now,
        )
        return self._instrument_repo.get(symbol)

    def seed_defaults(self) -> int:
        """Insert the default instruments that are not in the catalog yet."""
        added = 0
        now = now_eastern()
        for symbol, (name, price, volatility, risk, asset_type) in DEFAULT_INSTRUMENTS.items():
            if self._instrument_repo.get(symbol) is not None:
                continue
            self._instrument_repo.upsert(
                Instrument(
                    symbol=symbol,
                    name=name,
                    current_price=Decimal(price),
                    volatility_class=volatility,
                    risk_category=risk,
                    asset_type=asset_type,
                    updated_at_est=now,
                )
            )
            added += 1
        if added:
            logger.info("Seeded %d instruments into the catalog", added)
        return added
