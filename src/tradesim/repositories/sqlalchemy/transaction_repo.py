"""SQLAlchemy implementations of TransactionRepository and TransferRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from tradesim.core.money import from_db
from tradesim.core.timezone import to_eastern
from tradesim.domain.models import Transaction, FundTransfer
from tradesim.repositories.sqlalchemy.orm_models import TransactionORM, FundTransferORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed append-only transaction log."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, transaction: Transaction) -> Transaction:
        """Append an executed order to the log."""
        orm_txn = TransactionORM(
            txn_id=transaction.txn_id,
            account_id=transaction.account_id,
            symbol=transaction.symbol,
            txn_type=transaction.txn_type,
            shares=transaction.shares,
            price=transaction.price,
            total=transaction.total,
            txn_time_est=transaction.txn_time_est,
        )
        self._db.add(orm_txn)
        self._db.flush()
        return transaction

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def list_by_account(
        self,
        account_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
        newest_first: bool = False,
    ) -> list[Transaction]:
        """List transactions for an account ordered by txn_time_est."""
        query = self._db.query(TransactionORM).filter(
            TransactionORM.account_id == account_id
        )
        if since is not None:
            query = query.filter(TransactionORM.txn_time_est >= since)
        if newest_first:
            query = query.order_by(TransactionORM.txn_time_est.desc(), TransactionORM.seq.desc())
        else:
            query = query.order_by(TransactionORM.txn_time_est, TransactionORM.seq)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count_by_account(self, account_id: str) -> int:
        """Number of executed orders for an account."""
        return (
            self._db.query(func.count(TransactionORM.seq))
            .filter(TransactionORM.account_id == account_id)
            .scalar()
        ) or 0

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            symbol=orm.symbol,
            txn_type=orm.txn_type,
            shares=int(orm.shares),
            price=from_db(orm.price),
            total=from_db(orm.total),
            txn_time_est=to_eastern(orm.txn_time_est),
        )


class SqlAlchemyTransferRepository:
    """SQLAlchemy-backed cash/savings transfer log."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, transfer: FundTransfer) -> FundTransfer:
        """Append a transfer record."""
        self._db.add(
            FundTransferORM(
                transfer_id=transfer.transfer_id,
                account_id=transfer.account_id,
                direction=transfer.direction,
                amount=transfer.amount,
                description=transfer.description,
                transfer_time_est=transfer.transfer_time_est,
            )
        )
        self._db.flush()
        return transfer

    def list_by_account(self, account_id: str) -> list[FundTransfer]:
        """List transfers for an account, newest first."""
        orm_transfers = (
            self._db.query(FundTransferORM)
            .filter(FundTransferORM.account_id == account_id)
            .order_by(FundTransferORM.transfer_time_est.desc(), FundTransferORM.seq.desc())
            .all()
        )
        return [
            FundTransfer(
                transfer_id=t.transfer_id,
                account_id=t.account_id,
                direction=t.direction,
                amount=from_db(t.amount),
                transfer_time_est=to_eastern(t.transfer_time_est),
                description=t.description,
            )
            for t in orm_transfers
        ]
