"""
Request logging middleware.

Replaces uvicorn's access log with one structured line per request.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from meter_gateway.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request, Response


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log method, path, status and duration for every request."""
    start = time.perf_counter()
    # Unhandled errors propagate through call_next and end up as a 500
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        get_logger().info(
            "Request completed",
            extra={
                "method": request.method,
                "path": str(request.url.path),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
