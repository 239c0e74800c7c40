"""
Meter-report endpoints.

- GET /proxy/meter-reports/{client_id}: MO numbers for one client
- POST /proxy/meter-reports: MO numbers for many clients, fetched concurrently
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from meter_gateway.config import get_settings
from meter_gateway.core.exceptions import ServiceError
from meter_gateway.core.state import get_app_state
from meter_gateway.logging import get_logger
from meter_gateway.routers.dependencies import BearerProtectedRoute, require_bearer_token
from meter_gateway.schemas import ErrorResponse, MeterReportsRequest, MeterReportsResponse
from meter_gateway.services.reports import fetch_reports

router = APIRouter(
    route_class=BearerProtectedRoute,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("/proxy/meter-reports/{client_id}")
async def get_meter_report(
    client_id: str,
    token: str = Depends(require_bearer_token),
) -> JSONResponse:
    """Fetch MO numbers for a single client."""
    if not client_id.strip():
        raise ServiceError(
            error="missing_client_id",
            message="Client ID required",
            status_code=400,
        )

    logger = get_logger()
    logger.info("Fetching MO numbers", extra={"client_id": client_id})

    data = await get_app_state().meter_report_client.get_mo_numbers(token, client_id)
    return JSONResponse(content=data)


@router.post("/proxy/meter-reports", response_model=MeterReportsResponse)
async def get_meter_reports(
    request: MeterReportsRequest,
    token: str = Depends(require_bearer_token),
) -> MeterReportsResponse:
    """
    Fetch MO numbers for several clients.

    Lookups run concurrently up to meter_reports.max_concurrency. A failed
    lookup shows up as ``{clientId, error}`` in its slot; the response is
    200 as long as the request itself was valid.
    """
    if not request.client_ids:
        raise ServiceError(
            error="invalid_client_ids",
            message="clientIds must be a non-empty array",
            status_code=400,
        )

    settings = get_settings()
    reports = await fetch_reports(
        get_app_state().meter_report_client,
        token,
        request.client_ids,
        settings.meter_reports.max_concurrency,
    )
    return MeterReportsResponse(reports=reports)
