"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "BUY"
    SELL = "SELL"


class TransferDirection(str, Enum):
    """Direction of an internal cash/savings transfer."""

    CASH_TO_SAVINGS = "CASH_TO_SAVINGS"
    SAVINGS_TO_CASH = "SAVINGS_TO_CASH"


class RiskProfile(str, Enum):
    """Risk tolerance bucket; also used as an instrument's risk category."""

    CONSERVATIVE = "CONSERVATIVE"
    MODERATE = "MODERATE"
    AGGRESSIVE = "AGGRESSIVE"


class VolatilityClass(str, Enum):
    """Price-walk amplitude class of an instrument."""

    LOW = "LOW"  # bonds, +/-0.5%
    MEDIUM = "MEDIUM"  # default, +/-2%
    COMMODITY = "COMMODITY"  # +/-1.5%
    HIGH = "HIGH"  # +/-5%


class AssetType(str, Enum):
    """Kind of tradable instrument."""

    STOCK = "STOCK"
    ETF = "ETF"
    BOND = "BOND"
    COMMODITY = "COMMODITY"
    CRYPTO = "CRYPTO"


class AchievementCategory(str, Enum):
    """Grouping used by the achievements view."""

    TRADING = "trading"
    LEARNING = "learning"
    PORTFOLIO = "portfolio"
    MILESTONE = "milestone"


class GameType(str, Enum):
    """Ancillary game counters fed to the achievement rules."""

    QUIZ = "quiz"
    MARKET_PREDICTION = "market_prediction"
    LEARNING = "learning"
