"""Background price simulation for the instrument catalog."""

import logging
import math
import random
import threading
import time
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tradesim.core.exceptions import PersistenceFailureError
from tradesim.core.money import percent, quantize_price, to_decimal
from tradesim.core.timezone import now_eastern
from tradesim.domain.models import Instrument, VolatilityClass
from tradesim.domain.views import PriceUpdate
from tradesim.repositories.sqlalchemy.instrument_repo import SqlAlchemyInstrumentRepository

logger = logging.getLogger(__name__)

# Maximum absolute per-tick move before mean reversion
VOLATILITY: dict[VolatilityClass, Decimal] = {
    VolatilityClass.LOW: Decimal("0.005"),
    VolatilityClass.MEDIUM: Decimal("0.02"),
    VolatilityClass.COMMODITY: Decimal("0.015"),
    VolatilityClass.HIGH: Decimal("0.05"),
}
MEAN_REVERSION = Decimal("0.1")
TREND_AMPLITUDE = Decimal("0.001")
TREND_PERIOD_SECONDS = 86400
EPSILON = Decimal("0.01")


def simulate_move(
    current_price: Decimal,
    volatility_class: VolatilityClass,
    rng: random.Random,
    wall_time: Optional[float] = None,
) -> Decimal:
    """
    One bounded random-walk step.

    new = max(price * (1 + delta), EPSILON), where delta is a uniform draw
    scaled by the volatility class, pulled toward zero by MEAN_REVERSION, plus
    a slow sinusoidal trend when wall_time is given.
    """
    scale = VOLATILITY.get(volatility_class, VOLATILITY[VolatilityClass.MEDIUM])
    raw = to_decimal(rng.uniform(-1.0, 1.0)) * scale
    delta = raw - MEAN_REVERSION * raw
    if wall_time is not None:
        delta += to_decimal(math.sin(wall_time / TREND_PERIOD_SECONDS)) * TREND_AMPLITUDE
    new_price = quantize_price(current_price * (1 + delta))
    return max(new_price, EPSILON)


class PriceSimulator:
    """
    Moves every active instrument's price once per tick.

    Reads and writes only the instrument catalog, in its own session; it
    never touches account state. Ticks requested sooner than the minimum
    interval after the previous one are skipped.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        min_interval_seconds: float = 30.0,
        trend_enabled: bool = True,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ):
        self._session_factory = session_factory
        self._min_interval = min_interval_seconds
        self._trend_enabled = trend_enabled
        self._rng = rng or random.Random()
        self._clock = clock
        self._wall_clock = wall_clock
        self._last_tick: Optional[float] = None
        self._tick_lock = threading.Lock()

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval

    def next_price(self, instrument: Instrument) -> PriceUpdate:
        """Compute (but do not store) the next price of an instrument."""
        wall_time = self._wall_clock() if self._trend_enabled else None
        old_price = instrument.current_price
        new_price = simulate_move(old_price, instrument.volatility_class, self._rng, wall_time)
        change = new_price - old_price
        return PriceUpdate(
            symbol=instrument.symbol,
            old_price=old_price,
            new_price=new_price,
            price_change=change,
            price_change_percent=percent(change, old_price),
            as_of=now_eastern(),
        )

    def tick(self) -> list[PriceUpdate]:
        """
        Advance all active instruments by one step.

        Returns the applied updates, or an empty list if the minimum interval
        has not elapsed since the previous tick.
        """
        with self._tick_lock:
            now = self._clock()
            if self._last_tick is not None and now - self._last_tick < self._min_interval:
                logger.debug(
                    "Skipping price tick: %.1fs since last, minimum %.1fs",
                    now - self._last_tick, self._min_interval,
                )
                return []
            self._last_tick = now
            return self._apply_tick()

    def _apply_tick(self) -> list[PriceUpdate]:
        session = self._session_factory()
        updates: list[PriceUpdate] = []
        try:
            catalog = SqlAlchemyInstrumentRepository(session)
            for instrument in catalog.list_active():
                update = self.next_price(instrument)
                catalog.update_price(
                    symbol=update.symbol,
                    current_price=update.new_price,
                    price_change=update.price_change,
                    price_change_percent=update.price_change_percent,
                    updated_at_est=update.as_of,
                )
                # Each instrument's price is replaced on its own
                session.commit()
                updates.append(update)
                logger.debug(
                    "%s %s -> %s (%s%%)",
                    update.symbol, update.old_price, update.new_price, update.price_change_percent,
                )
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Price tick failed after %d updates: %s", len(updates), e)
            raise PersistenceFailureError("price tick", str(e)) from e
        finally:
            session.close()

        logger.info("Price tick applied to %d instruments", len(updates))
        return updates


class PriceFeedScheduler(threading.Thread):
    """
    Background thread owning the simulator's tick loop.

    Created and started explicitly by the application; the interval is never
    shorter than the simulator's minimum interval.
    """

    def __init__(self, simulator: PriceSimulator, interval_seconds: float = 30.0):
        super().__init__(name="price-feed", daemon=True)
        self._simulator = simulator
        self._interval = max(interval_seconds, simulator.min_interval_seconds)
        self._stop_event = threading.Event()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def run(self) -> None:
        logger.info("Price feed started (interval %.1fs)", self._interval)
        while not self._stop_event.is_set():
            try:
                self._simulator.tick()
            except Exception:
                logger.exception("Price feed tick failed")
            self._stop_event.wait(self._interval)
        logger.info("Price feed stopped")

    def stop(self, timeout: float = 5.0) -> None:
        """Signal the loop to exit and wait for the thread."""
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)
