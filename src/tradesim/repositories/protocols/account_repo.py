"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from tradesim.domain.models import Account, RiskProfile


class AccountRepository(Protocol):
    """Interface for account data access. Writes are flushed, not committed."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_by_name(self, name: str) -> Optional[Account]:
        """Retrieve account by name."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts."""
        ...

    def update_balances(
        self,
        account_id: str,
        cash_balance: Decimal,
        savings_balance: Decimal,
    ) -> Account:
        """Replace both balances of an account."""
        ...

    def update_risk_profile(
        self,
        account_id: str,
        risk_profile: RiskProfile,
        risk_score: int,
    ) -> Account:
        """Store the advisory risk profile on an account."""
        ...
