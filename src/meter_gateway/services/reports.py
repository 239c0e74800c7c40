"""
Fan-out of meter-report lookups.

Fetches MO numbers for many clients concurrently, with a hard cap on the
number of in-flight upstream calls. Every client id yields exactly one
result, success or failure, in input order.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from meter_gateway.core.exceptions import UpstreamError
from meter_gateway.logging import get_logger
from meter_gateway.schemas import MeterReportFailure, MeterReportSuccess

if TYPE_CHECKING:
    from collections.abc import Sequence

    from meter_gateway.clients import MeterReportClient

MeterReportResult = MeterReportSuccess | MeterReportFailure

GENERIC_FAILURE_MESSAGE = "Failed to fetch MO numbers"


async def fetch_reports(
    client: MeterReportClient,
    token: str,
    client_ids: Sequence[int | str],
    max_concurrency: int,
) -> list[MeterReportResult]:
    """
    Fetch MO numbers for each client id.

    A failing lookup is captured as a MeterReportFailure and never cancels
    the others.

    Args:
        client: Meter-report upstream client
        token: Caller's bearer token
        client_ids: Client identifiers, echoed back unchanged
        max_concurrency: Maximum number of concurrent upstream calls

    Returns:
        One result per client id, in the same order
    """
    logger = get_logger()
    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_one(client_id: int | str) -> MeterReportResult:
        async with semaphore:
            try:
                data = await client.get_mo_numbers(token, client_id)
            except UpstreamError as e:
                logger.warning(
                    "Meter report lookup failed",
                    extra={
                        "client_id": client_id,
                        "error_code": e.error,
                        "status_code": e.status_code,
                    },
                )
                return MeterReportFailure(client_id=client_id, error=e.message)
            except Exception:
                logger.exception(
                    "Unexpected error during meter report lookup",
                    extra={"client_id": client_id},
                )
                return MeterReportFailure(client_id=client_id, error=GENERIC_FAILURE_MESSAGE)

        return MeterReportSuccess(client_id=client_id, data=data)

    results = await asyncio.gather(*(fetch_one(client_id) for client_id in client_ids))

    failed = sum(1 for result in results if isinstance(result, MeterReportFailure))
    logger.info(
        "Meter report fan-out complete",
        extra={"requested": len(client_ids), "failed": failed},
    )
    return list(results)
