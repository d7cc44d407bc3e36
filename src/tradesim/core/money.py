"""Decimal helpers for money, prices and percentages."""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

PRICE_QUANT = Decimal("0.0001")
COST_QUANT = Decimal("0.00000001")
PERCENT_QUANT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_price(value: Number) -> Decimal:
    """Round a price (or a money amount derived from prices) to 4 places."""
    return to_decimal(value).quantize(PRICE_QUANT, rounding=ROUND_HALF_EVEN)


def quantize_cost(value: Number) -> Decimal:
    """Round a weighted-average cost basis to 8 places."""
    return to_decimal(value).quantize(COST_QUANT, rounding=ROUND_HALF_EVEN)


def percent(part: Decimal, whole: Decimal) -> Decimal:
    """Return part/whole*100 rounded to 2 places, or 0 when whole is not positive."""
    if whole <= ZERO:
        return ZERO.quantize(PERCENT_QUANT)
    return (part / whole * HUNDRED).quantize(PERCENT_QUANT, rounding=ROUND_HALF_EVEN)


def from_db(value) -> Decimal:
    """Read a Numeric column back as an exact Decimal."""
    if value is None:
        return ZERO
    return to_decimal(value)
