"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meter_gateway.config import get_settings
from meter_gateway.core.exceptions import register_exception_handlers
from meter_gateway.core.lifespan import lifespan
from meter_gateway.core.middleware import log_requests
from meter_gateway.routers import auth, clients, health, info, meter_reports


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        description="Gateway forwarding portal requests to auth, client and meter-report APIs",
        version=settings.service.version,
        lifespan=lifespan,
    )

    app.middleware("http")(log_requests)

    # "*" means allow-all; credentials only for an explicit allow-list
    cors_origins = settings.server.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Operations"])
    app.include_router(info.router, tags=["Operations"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(clients.router, tags=["Clients"])
    app.include_router(meter_reports.router, tags=["Meter Reports"])

    return app


# nosemgrep: no-module-level-constants (required for uvicorn to load the app)
app = create_app()
