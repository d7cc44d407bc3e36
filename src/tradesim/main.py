"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradesim.app_context import create_price_feed, seed_catalog
from tradesim.config.settings import get_settings
from tradesim.config.logging_config import setup_logging
from tradesim.repositories.sqlalchemy.database import get_session_factory, init_db
from tradesim.api.routers import (
    accounts_router,
    trades_router,
    instruments_router,
    achievements_router,
    risk_router,
    account_risk_router,
)
from tradesim.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    seed_catalog(get_session_factory())

    price_feed = None
    settings = get_settings()
    if settings.price_simulator_enabled:
        price_feed = create_price_feed(settings, get_session_factory())
        price_feed.start()

    yield

    # Shutdown
    if price_feed is not None:
        price_feed.stop()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Simulated trading ledger with price simulation, achievements and risk profiling",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(trades_router)
app.include_router(achievements_router)
app.include_router(account_risk_router)
app.include_router(instruments_router)
app.include_router(risk_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.warning("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
