"""
Shared route dependencies.

Protected routers use ``BearerProtectedRoute`` so a missing token is
rejected before FastAPI reads the request body, and
``require_bearer_token`` to hand the token to the endpoint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header
from fastapi.routing import APIRoute

from meter_gateway.core.exceptions import ServiceError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request, Response

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Pull the token out of an Authorization header value.

    The ``Bearer`` scheme is optional and matched case-insensitively.
    Returns None when nothing usable is left.
    """
    if authorization is None:
        return None

    parts = authorization.strip().split(maxsplit=1)
    if not parts:
        return None

    if parts[0].lower() == BEARER_SCHEME:
        token = parts[1].strip() if len(parts) > 1 else ""
        return token or None

    return authorization.strip()


def unauthorized_error() -> ServiceError:
    """Build the 401 raised for a missing or empty token."""
    return ServiceError(
        error="unauthorized",
        message="Authorization token required",
        status_code=401,
    )


class BearerProtectedRoute(APIRoute):
    """
    Route that rejects requests without a bearer token up front.

    Body decoding and validation happen inside the handler FastAPI builds,
    so the check wraps that handler.
    """

    def get_route_handler(self) -> Callable[[Request], Awaitable[Response]]:
        handler = super().get_route_handler()

        async def protected_handler(request: Request) -> Response:
            if extract_bearer_token(request.headers.get("authorization")) is None:
                raise unauthorized_error()
            return await handler(request)

        return protected_handler


# nosemgrep: no-default-parameter-values (FastAPI header declaration)
async def require_bearer_token(
    authorization: str | None = Header(default=None),
) -> str:
    """
    Require a bearer token on the incoming request.

    Raises:
        ServiceError: 401 if the Authorization header is missing or empty
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise unauthorized_error()
    return token
