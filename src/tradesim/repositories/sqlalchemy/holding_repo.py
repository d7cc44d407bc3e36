"""SQLAlchemy implementation of HoldingRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from tradesim.core.money import from_db
from tradesim.core.timezone import to_eastern
from tradesim.domain.models import Holding
from tradesim.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol, if any."""
        orm_holding = self._get_orm(account_id, symbol)
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_account(self, account_id: str) -> list[Holding]:
        """List all holdings for an account, ordered by symbol."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.account_id == account_id)
            .order_by(HoldingORM.symbol)
            .populate_existing()
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def upsert(self, holding: Holding) -> Holding:
        """Insert or replace a holding."""
        orm_holding = self._get_orm(holding.account_id, holding.symbol)

        if orm_holding:
            orm_holding.shares = holding.shares
            orm_holding.avg_cost = holding.avg_cost
            orm_holding.cost_basis = holding.cost_basis
            orm_holding.updated_at_est = holding.updated_at_est
        else:
            orm_holding = HoldingORM(
                account_id=holding.account_id,
                symbol=holding.symbol,
                shares=holding.shares,
                avg_cost=holding.avg_cost,
                cost_basis=holding.cost_basis,
                created_at_est=holding.created_at_est,
                updated_at_est=holding.updated_at_est,
            )
            self._db.add(orm_holding)

        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, account_id: str, symbol: str) -> None:
        """Remove a holding."""
        self._db.query(HoldingORM).filter(
            HoldingORM.account_id == account_id,
            HoldingORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def _get_orm(self, account_id: str, symbol: str) -> Optional[HoldingORM]:
        return (
            self._db.query(HoldingORM)
            .filter(
                HoldingORM.account_id == account_id,
                HoldingORM.symbol == symbol,
            )
            .populate_existing()
            .first()
        )

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            account_id=orm.account_id,
            symbol=orm.symbol,
            shares=int(orm.shares or 0),
            avg_cost=from_db(orm.avg_cost),
            cost_basis=from_db(orm.cost_basis),
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
