"""
Client-registry endpoints.

Thin pass-throughs to the client-registry service. Every route requires
a bearer token, which is forwarded upstream.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from meter_gateway.clients.registry import unwrap_items
from meter_gateway.config import get_settings
from meter_gateway.core.state import get_app_state
from meter_gateway.logging import get_logger
from meter_gateway.routers.dependencies import BearerProtectedRoute, require_bearer_token
from meter_gateway.schemas import ErrorResponse

router = APIRouter(
    route_class=BearerProtectedRoute,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("/api/clients")
async def list_clients(token: str = Depends(require_bearer_token)) -> JSONResponse:
    """
    List all clients.

    With pagination bypass enabled, asks the upstream for one oversized
    page and returns the bare list instead of the paged envelope.
    """
    settings = get_settings()
    state = get_app_state()
    logger = get_logger()

    if not settings.clients.bypass_pagination:
        data = await state.registry_client.list_clients(token)
        return JSONResponse(content=data)

    data = await state.registry_client.list_clients(
        token,
        max_result_count=settings.clients.max_result_count,
    )
    clients = unwrap_items(data)

    logger.info(
        "Fetched full client list",
        extra={"count": len(clients) if isinstance(clients, list) else None},
    )
    return JSONResponse(content=clients)


@router.get("/proxy/clients")
async def proxy_clients(token: str = Depends(require_bearer_token)) -> JSONResponse:
    """List clients, relaying the upstream body unchanged."""
    data = await get_app_state().registry_client.list_clients(token)
    return JSONResponse(content=data)


@router.get("/api/mobyclients")
async def list_moby_clients(token: str = Depends(require_bearer_token)) -> JSONResponse:
    """List Moby clients."""
    data = await get_app_state().registry_client.list_moby_clients(token)
    return JSONResponse(content=data)


@router.get("/api/clients/{client_id}")
async def get_client(
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> JSONResponse:
    """Get a single client."""
    data = await get_app_state().registry_client.get_client(token, client_id)
    return JSONResponse(content=data)


@router.post("/api/clients")
async def create_client(
    payload: Any = Body(...),
    token: str = Depends(require_bearer_token),
) -> JSONResponse:
    """Create a client; the request body is forwarded unchanged."""
    data = await get_app_state().registry_client.create_client(token, payload)
    return JSONResponse(content=data)


@router.put("/api/clients/{client_id}")
async def update_client(
    client_id: str,
    payload: Any = Body(...),
    token: str = Depends(require_bearer_token),
) -> JSONResponse:
    """Update a client; the request body is forwarded unchanged."""
    data = await get_app_state().registry_client.update_client(token, client_id, payload)
    return JSONResponse(content=data)


@router.delete("/api/clients/{client_id}")
async def delete_client(
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> JSONResponse:
    """Delete a client."""
    data = await get_app_state().registry_client.delete_client(token, client_id)
    return JSONResponse(content=data)
