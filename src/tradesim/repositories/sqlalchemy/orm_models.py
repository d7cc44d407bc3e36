"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)

from tradesim.repositories.sqlalchemy.database import Base
from tradesim.domain.models.enums import (
    TransactionType,
    TransferDirection,
    RiskProfile,
    VolatilityClass,
    AssetType,
    GameType,
)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    cash_balance = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    savings_balance = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    initial_cash = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    risk_profile = Column(SqlEnum(RiskProfile), nullable=True)
    risk_score = Column(Integer, nullable=True)
    created_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)


class HoldingORM(Base):
    """SQLAlchemy model for Holding (cost-basis position)."""

    __tablename__ = "holdings"

    account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    shares = Column(Integer, nullable=False, default=0)
    avg_cost = Column(Numeric(precision=20, scale=8), nullable=False, default=Decimal("0"))
    cost_basis = Column(Numeric(precision=28, scale=8), nullable=False, default=Decimal("0"))
    created_at_est = Column(DateTime, nullable=True)
    updated_at_est = Column(DateTime, nullable=True)


class InstrumentORM(Base):
    """SQLAlchemy model for Instrument (catalog entry)."""

    __tablename__ = "instruments"

    symbol = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    current_price = Column(Numeric(precision=18, scale=4), nullable=False)
    volatility_class = Column(
        SqlEnum(VolatilityClass),
        default=VolatilityClass.MEDIUM,
        nullable=False,
    )
    risk_category = Column(SqlEnum(RiskProfile), default=RiskProfile.MODERATE, nullable=False)
    asset_type = Column(SqlEnum(AssetType), default=AssetType.STOCK, nullable=False)
    price_change = Column(Numeric(precision=18, scale=4), default=Decimal("0"))
    price_change_percent = Column(Numeric(precision=9, scale=2), default=Decimal("0"))
    is_active = Column(Boolean, default=True)
    updated_at_est = Column(DateTime, nullable=True)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only order log)."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_account_time", "account_id", "txn_time_est"),)

    seq = Column(Integer, primary_key=True, autoincrement=True)
    txn_id = Column(String(36), unique=True, nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    shares = Column(Integer, nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=False)
    total = Column(Numeric(precision=18, scale=4), nullable=False)
    txn_time_est = Column(DateTime, nullable=False)


class FundTransferORM(Base):
    """SQLAlchemy model for FundTransfer (cash/savings movements)."""

    __tablename__ = "fund_transfers"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    transfer_id = Column(String(36), unique=True, nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    direction = Column(SqlEnum(TransferDirection), nullable=False)
    amount = Column(Numeric(precision=18, scale=4), nullable=False)
    description = Column(Text, nullable=True)
    transfer_time_est = Column(DateTime, nullable=False)


class AchievementUnlockORM(Base):
    """SQLAlchemy model for recorded achievement unlocks."""

    __tablename__ = "achievement_unlocks"
    __table_args__ = (
        UniqueConstraint("account_id", "achievement_id", name="uq_achievement_unlock"),
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    achievement_id = Column(String(64), nullable=False)
    unlocked_at_est = Column(DateTime, nullable=False)


class GameScoreORM(Base):
    """SQLAlchemy model for ancillary game counters."""

    __tablename__ = "game_scores"

    account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    game_type = Column(SqlEnum(GameType), primary_key=True)
    score = Column(Integer, nullable=False, default=0)
    correct_predictions = Column(Integer, nullable=False, default=0)
    total_attempts = Column(Integer, nullable=False, default=0)
    updated_at_est = Column(DateTime, nullable=True)
