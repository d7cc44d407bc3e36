"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tradesim.core.money import from_db
from tradesim.core.timezone import to_eastern
from tradesim.domain.models import Account, RiskProfile
from tradesim.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            name=account.name,
            cash_balance=account.cash_balance,
            savings_balance=account.savings_balance,
            initial_cash=account.initial_cash,
            risk_profile=account.risk_profile,
            risk_score=account.risk_score,
            created_at_est=account.created_at_est,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).populate_existing().first()
        return self._to_domain(orm_account) if orm_account else None

    def get_by_name(self, name: str) -> Optional[Account]:
        """Retrieve account by name."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.name == name
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.name).all()
        return [self._to_domain(a) for a in orm_accounts]

    def update_balances(
        self,
        account_id: str,
        cash_balance: Decimal,
        savings_balance: Decimal,
    ) -> Account:
        """Replace both balances of an account."""
        orm_account = self._get_orm(account_id)
        orm_account.cash_balance = cash_balance
        orm_account.savings_balance = savings_balance
        self._db.flush()
        return self._to_domain(orm_account)

    def update_risk_profile(
        self,
        account_id: str,
        risk_profile: RiskProfile,
        risk_score: int,
    ) -> Account:
        """Store the advisory risk profile on an account."""
        orm_account = self._get_orm(account_id)
        orm_account.risk_profile = risk_profile
        orm_account.risk_score = risk_score
        self._db.flush()
        return self._to_domain(orm_account)

    def _get_orm(self, account_id: str) -> AccountORM:
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()
        if orm_account is None:
            raise ValueError(f"Account not found: {account_id}")
        return orm_account

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            name=orm.name,
            cash_balance=from_db(orm.cash_balance),
            savings_balance=from_db(orm.savings_balance),
            initial_cash=from_db(orm.initial_cash),
            risk_profile=orm.risk_profile,
            risk_score=orm.risk_score,
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
        )
