"""
Service information endpoint.

Exposes service identity, uptime and the (redacted) configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from meter_gateway.config import get_safe_config, get_settings
from meter_gateway.core.state import get_app_state
from meter_gateway.schemas import InfoResponse, UpstreamsInfo

router = APIRouter()


@router.get("/info", response_model=InfoResponse)
async def get_info() -> InfoResponse:
    """
    Get service information and configuration.

    Returns:
        Service metadata, upstream URLs and configuration with
        sensitive values redacted
    """
    settings = get_settings()
    state = get_app_state()

    return InfoResponse(
        service=settings.service.name,
        version=settings.service.version,
        uptime=state.uptime_formatted,
        uptime_seconds=round(state.uptime_seconds, 3),
        upstreams=UpstreamsInfo(
            auth=settings.upstreams.auth_url,
            clients=settings.upstreams.clients_url,
            meter_reports=settings.upstreams.meter_reports_url,
        ),
        config=get_safe_config(),
    )
