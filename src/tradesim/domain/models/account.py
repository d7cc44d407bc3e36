"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import RiskProfile


@dataclass
class Account:
    """
    Simulated brokerage account.

    Holds virtual cash and savings. Both balances are mutated only by the
    ledger, under the account lock, and never go below zero.
    """

    account_id: str
    name: str
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    savings_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    initial_cash: Decimal = field(default_factory=lambda: Decimal("0"))
    risk_profile: Optional[RiskProfile] = None
    risk_score: Optional[int] = None
    created_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.risk_profile, str):
            self.risk_profile = RiskProfile(self.risk_profile)
