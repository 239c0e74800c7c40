"""
Service entry point.

This module provides the main() function for running the service
with production-grade configuration.
"""

from __future__ import annotations

import sys

import uvicorn

from meter_gateway.config import ConfigurationError, get_settings


def main() -> int:
    """
    Run the service with uvicorn.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        # Print to stderr - logging isn't configured yet
        print(f"FATAL: Configuration error\n{e}", file=sys.stderr)
        return 1

    # Imported here so a bad config is reported above, not as an import error
    from meter_gateway.app import create_app  # noqa: PLC0415

    app = create_app()

    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",  # Uvicorn logs (our JSON logger handles app logs)
        access_log=False,  # Request logging middleware replaces the access log
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
