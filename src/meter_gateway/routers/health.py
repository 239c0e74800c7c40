"""
Health check endpoint.

Liveness only: upstream services are not probed.
"""

from __future__ import annotations

from fastapi import APIRouter

from meter_gateway.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the gateway process is up."""
    return HealthResponse(status="OK", message="Backend is running")
