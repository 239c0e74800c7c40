"""
Login endpoints.

Forwards user credentials to the authentication service and relays its
answer, status code included.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from meter_gateway.core.exceptions import ServiceError
from meter_gateway.core.state import get_app_state
from meter_gateway.logging import get_logger
from meter_gateway.schemas import ErrorResponse, LoginRequest

router = APIRouter()


@router.post(
    "/api/login",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.post(
    "/api/loginV2",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def login(request: LoginRequest) -> JSONResponse:
    """
    Authenticate a user.

    Both fields must be present and non-empty; the check runs before any
    upstream call. On success the upstream status and JSON body are
    returned unchanged.
    """
    if not request.userNameOrEmailAddress or not request.password:
        raise ServiceError(
            error="missing_credentials",
            message="Email and password are required",
            status_code=400,
        )

    state = get_app_state()
    status_code, data = await state.auth_client.authenticate(
        request.userNameOrEmailAddress,
        request.password,
    )

    get_logger().info("Login forwarded", extra={"upstream_status": status_code})

    return JSONResponse(status_code=status_code, content=data)
