"""View models for ledger and simulator outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models import Achievement, RiskProfile


@dataclass
class HoldingView:
    """A holding valued at the current catalog price."""

    symbol: str
    shares: int
    avg_cost: Decimal
    current_price: Decimal
    current_value: Decimal
    invested: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    price_change: Decimal = field(default_factory=lambda: Decimal("0"))
    price_change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    price_available: bool = True


@dataclass
class AccountSnapshot:
    """Point-in-time valuation of an account. Derived, never persisted."""

    account_id: str
    cash_balance: Decimal
    savings_balance: Decimal
    initial_cash: Decimal
    holdings: list[HoldingView] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    as_of: Optional[datetime] = None

    def holding(self, symbol: str) -> Optional[HoldingView]:
        for h in self.holdings:
            if h.symbol == symbol:
                return h
        return None


@dataclass
class PriceUpdate:
    """Result of one simulated price move."""

    symbol: str
    old_price: Decimal
    new_price: Decimal
    price_change: Decimal
    price_change_percent: Decimal
    as_of: datetime


@dataclass(frozen=True)
class AchievementCounters:
    """Ancillary counters evaluated alongside the snapshot."""

    transaction_count: int = 0
    quiz_score: int = 0
    correct_predictions: int = 0


@dataclass
class AchievementReport:
    """Full achievement list plus the ones unlocked by this evaluation."""

    achievements: list[Achievement] = field(default_factory=list)
    newly_unlocked: list[Achievement] = field(default_factory=list)

    @property
    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements if a.unlocked)


@dataclass
class RiskAnswer:
    """One questionnaire answer: the question and the score of the chosen option."""

    question_id: str
    selected_score: int


@dataclass
class RiskAssessment:
    """Scored questionnaire."""

    total_score: int
    risk_profile: RiskProfile
    answers: list[RiskAnswer] = field(default_factory=list)
