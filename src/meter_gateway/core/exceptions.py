"""
Custom exception handlers for consistent error responses.

Every error leaves the gateway as the same JSON envelope:
``{"error": <code>, "message": <text>, "details": {...}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meter_gateway.config import get_settings
from meter_gateway.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

    from fastapi import FastAPI, Request
    from starlette.requests import Request as StarletteRequest

    ExceptionHandler = Callable[
        [StarletteRequest, Exception],
        Coroutine[Any, Any, JSONResponse],
    ]


class ServiceError(Exception):
    """
    Base exception for service errors.

    Attributes:
        error: Machine-readable error code
        message: Human-readable description
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int,
        details: dict[str, object] | None = None,
    ) -> None:
        self.error = error
        self.message = message
        self.status_code = status_code
        if details is None:
            self.details: dict[str, object] = {}
        else:
            self.details = details
        super().__init__(message)


class UpstreamError(ServiceError):
    """
    Exception for upstream service failures.

    Raised when an upstream (auth, clients, meter reports) answers with a
    non-success status, returns an unparseable body, or cannot be reached.
    """


def error_body(
    error: str,
    message: str,
    details: dict[str, object] | None = None,
) -> dict[str, object]:
    """Build the JSON error envelope."""
    return {
        "error": error,
        "message": message,
        "details": details if details is not None else {},
    }


async def service_error_handler(
    request: Request,
    exc: ServiceError,
) -> JSONResponse:
    """Handle ServiceError exceptions."""
    logger = get_logger()
    logger.warning(
        "Service error",
        extra={
            "error_code": exc.error,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "path": str(request.url.path),
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error, exc.message, exc.details),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Handle routing-level HTTP errors.

    Unknown paths and unsupported methods on known paths both count as an
    unmatched route and get the fixed 404 body.
    """
    if exc.status_code in {404, 405}:
        return JSONResponse(
            status_code=404,
            content=error_body("not_found", "Endpoint not found"),
        )

    get_logger().warning(
        "HTTP error",
        extra={"status_code": exc.status_code, "path": str(request.url.path)},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("http_error", str(exc.detail)),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Map malformed or mistyped request bodies to 400."""
    errors = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
    get_logger().info(
        "Request validation failed",
        extra={"path": str(request.url.path), "errors": errors},
    )
    return JSONResponse(
        status_code=400,
        content=error_body("invalid_request", "Request body is invalid", {"errors": errors}),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs full traceback. The exception text reaches the client only when
    errors.expose_details is enabled.
    """
    logger = get_logger()
    logger.exception(
        "Unhandled exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
        },
    )

    details: dict[str, object] = {}
    if get_settings().errors.expose_details:
        details["reason"] = str(exc)

    return JSONResponse(
        status_code=500,
        content=error_body("internal_error", "Internal server error", details),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    # Cast to expected FastAPI handler type - our more specific signature is compatible
    app.add_exception_handler(
        ServiceError,
        cast("ExceptionHandler", service_error_handler),
    )
    app.add_exception_handler(
        StarletteHTTPException,
        cast("ExceptionHandler", http_exception_handler),
    )
    app.add_exception_handler(
        RequestValidationError,
        cast("ExceptionHandler", validation_exception_handler),
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
