"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI

from haulpay.api.routes import attendance, health, loans, payroll
from haulpay.core.config import AppSettings
from haulpay.core.logging_config import configure_logging
from haulpay.persistence import create_persistence


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = getattr(app.state, "settings", None) or AppSettings()
    app.state.settings = settings
    configure_logging(settings)
    if getattr(app.state, "store", None) is None:
        app.state.store, app.state.cache = create_persistence(settings)
    yield


def create_app(settings: AppSettings | None = None, store: Any = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` must implement the data-source, payroll, attendance and
    employee store protocols; when omitted it is built from settings.
    """
    app = FastAPI(
        title="HaulPay Payroll Valuation Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.include_router(health.router)
    app.include_router(payroll.router, prefix="/payroll")
    app.include_router(loans.router, prefix="/loans")
    app.include_router(attendance.router)
    return app
