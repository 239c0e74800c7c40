"""
Structured JSON logging for production observability.

Every line written by the service logger is one JSON object. Values passed
through ``extra=`` end up under an ``extra`` key.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def setup_logging(level: str, service_name: str) -> logging.Logger:
    """
    Send the service logger's output to stdout as JSON.

    Raises:
        ValueError: If level is not a standard logging level name
    """
    numeric_level = logging.getLevelNamesMapping().get(level.upper())
    if numeric_level is None or numeric_level == logging.NOTSET:
        raise ValueError(f"Invalid log level: {level}")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    """
    Get the service logger instance.

    Returns:
        Logger instance for the service
    """
    # Import lazily to avoid import-time settings evaluation.
    from meter_gateway.config import get_settings  # noqa: PLC0415

    return logging.getLogger(get_settings().service.name)
