from fastapi import FastAPI

from .alert_destinations import router as alert_destinations_router
from .alerts import router as alerts_router
from .auth import router as auth_router
from .migrate import router as migrate_router
from .notifications import router as notifications_router
from .notifications import ws_router as notifications_ws_router
from .transactions import router as transactions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(alerts_router)
    app.include_router(alert_destinations_router)
    app.include_router(notifications_router)
    app.include_router(notifications_ws_router)
    app.include_router(transactions_router)
    app.include_router(migrate_router)
