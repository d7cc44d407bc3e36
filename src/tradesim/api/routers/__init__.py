"""API routers package."""

from tradesim.api.routers.accounts import router as accounts_router
from tradesim.api.routers.trades import router as trades_router
from tradesim.api.routers.instruments import router as instruments_router
from tradesim.api.routers.achievements import router as achievements_router
from tradesim.api.routers.risk import router as risk_router
from tradesim.api.routers.risk import account_router as account_risk_router

__all__ = [
    "accounts_router",
    "trades_router",
    "instruments_router",
    "achievements_router",
    "risk_router",
    "account_risk_router",
]
