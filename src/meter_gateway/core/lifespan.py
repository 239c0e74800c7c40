"""
Application lifecycle management.

Handles startup (client initialization) and shutdown (cleanup) events
for proper resource management.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from meter_gateway.clients import AuthClient, ClientRegistryClient, MeterReportClient
from meter_gateway.config import get_settings
from meter_gateway.core.state import init_app_state
from meter_gateway.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Manage application lifecycle.

    Startup:
    - Initialize logging
    - Initialize application state
    - Create upstream HTTP clients

    Shutdown:
    - Log shutdown with uptime
    - Close HTTP clients
    """
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.server.log_level, settings.service.name)
    logger = get_logger()

    state = init_app_state()

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "host": settings.server.host,
            "port": settings.server.port,
        },
    )

    upstreams = settings.upstreams
    expose_details = settings.errors.expose_details

    logger.info(
        "Initializing upstream clients",
        extra={
            "auth_url": upstreams.auth_url,
            "clients_url": upstreams.clients_url,
            "meter_reports_url": upstreams.meter_reports_url,
            "timeout": upstreams.timeout_seconds,
        },
    )

    state.auth_client = AuthClient(
        base_url=upstreams.auth_url,
        timeout=upstreams.timeout_seconds,
        service_name="auth",
        tenant_id=upstreams.tenant_id,
        expose_details=expose_details,
    )

    state.registry_client = ClientRegistryClient(
        base_url=upstreams.clients_url,
        timeout=upstreams.timeout_seconds,
        service_name="clients",
        tenant_id=upstreams.tenant_id,
        expose_details=expose_details,
    )

    state.meter_report_client = MeterReportClient(
        base_url=upstreams.meter_reports_url,
        timeout=upstreams.timeout_seconds,
        service_name="meter report",
        tenant_id=upstreams.tenant_id,
        expose_details=expose_details,
        client_id_param=settings.meter_reports.client_id_param,
    )

    logger.info("Service ready to accept requests")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info(
        "Service shutting down",
        extra={
            "uptime_seconds": state.uptime_seconds,
            "uptime": state.uptime_formatted,
        },
    )

    await state.close_clients()

    logger.info("Service shutdown complete")
