"""SQLAlchemy implementation of InstrumentRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tradesim.core.money import from_db
from tradesim.core.timezone import to_eastern
from tradesim.domain.models import Instrument
from tradesim.repositories.sqlalchemy.orm_models import InstrumentORM


class SqlAlchemyInstrumentRepository:
    """SQLAlchemy-backed instrument catalog."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[Instrument]:
        """Get an instrument by symbol."""
        orm_instrument = self._get_orm(symbol)
        return self._to_domain(orm_instrument) if orm_instrument else None

    def list_active(self) -> list[Instrument]:
        """List instruments open for trading, ordered by symbol."""
        orm_instruments = (
            self._db.query(InstrumentORM)
            .filter(InstrumentORM.is_active == True)  # noqa: E712
            .order_by(InstrumentORM.symbol)
            .populate_existing()
            .all()
        )
        return [self._to_domain(i) for i in orm_instruments]

    def upsert(self, instrument: Instrument) -> Instrument:
        """Insert or replace an instrument."""
        orm_instrument = self._get_orm(instrument.symbol)
        if orm_instrument is None:
            orm_instrument = InstrumentORM(symbol=instrument.symbol)
            self._db.add(orm_instrument)

        orm_instrument.name = instrument.name
        orm_instrument.current_price = instrument.current_price
        orm_instrument.volatility_class = instrument.volatility_class
        orm_instrument.risk_category = instrument.risk_category
        orm_instrument.asset_type = instrument.asset_type
        orm_instrument.price_change = instrument.price_change
        orm_instrument.price_change_percent = instrument.price_change_percent
        orm_instrument.is_active = instrument.is_active
        orm_instrument.updated_at_est = instrument.updated_at_est

        self._db.flush()
        return self._to_domain(orm_instrument)

    def update_price(
        self,
        symbol: str,
        current_price: Decimal,
        price_change: Decimal,
        price_change_percent: Decimal,
        updated_at_est: datetime,
    ) -> None:
        """Replace the price fields of a single instrument."""
        self._db.query(InstrumentORM).filter(InstrumentORM.symbol == symbol).update(
            {
                InstrumentORM.current_price: current_price,
                InstrumentORM.price_change: price_change,
                InstrumentORM.price_change_percent: price_change_percent,
                InstrumentORM.updated_at_est: updated_at_est,
            },
            synchronize_session="fetch",
        )
        self._db.flush()

    def _get_orm(self, symbol: str) -> Optional[InstrumentORM]:
        return (
            self._db.query(InstrumentORM)
            .filter(InstrumentORM.symbol == symbol)
            .populate_existing()
            .first()
        )

    @staticmethod
    def _to_domain(orm: InstrumentORM) -> Instrument:
        """Convert ORM model to domain model."""
        return Instrument(
            symbol=orm.symbol,
            name=orm.name,
            current_price=from_db(orm.current_price),
            volatility_class=orm.volatility_class,
            risk_category=orm.risk_category,
            asset_type=orm.asset_type,
            price_change=from_db(orm.price_change),
            price_change_percent=from_db(orm.price_change_percent),
            is_active=bool(orm.is_active),
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
