"""
Unit tests for the meter-report fan-out.

The upstream client is mocked; these tests cover ordering, per-item
failure isolation and the concurrency cap.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from meter_gateway.core.exceptions import UpstreamError
from meter_gateway.schemas import MeterReportFailure, MeterReportSuccess
from meter_gateway.services.reports import GENERIC_FAILURE_MESSAGE, fetch_reports


def make_client(side_effect: object) -> AsyncMock:
    """Create a mock MeterReportClient whose lookups use side_effect."""
    client = AsyncMock()
    client.get_mo_numbers.side_effect = side_effect
    return client


@pytest.mark.unit
class TestFetchReports:
    """Tests for fetch_reports."""

    async def test_all_successful(self) -> None:
        """Every id yields a success with its data."""

        async def lookup(_token: str, client_id: int | str) -> list[str]:
            return [f"MO-{client_id}"]

        results = await fetch_reports(make_client(lookup), "tok", [1, 2, 3], max_concurrency=5)

        assert results == [
            MeterReportSuccess(client_id=1, data=["MO-1"]),
            MeterReportSuccess(client_id=2, data=["MO-2"]),
            MeterReportSuccess(client_id=3, data=["MO-3"]),
        ]

    async def test_failure_is_isolated(self) -> None:
        """One failing id does not affect the others."""

        async def lookup(_token: str, client_id: int | str) -> dict[str, object]:
            if client_id == 2:
                raise UpstreamError(
                    error="upstream_error",
                    message="meter report service returned an error",
                    status_code=500,
                )
            return {"client": client_id}

        results = await fetch_reports(make_client(lookup), "tok", [1, 2], max_concurrency=5)

        assert results[0] == MeterReportSuccess(client_id=1, data={"client": 1})
        assert results[1] == MeterReportFailure(
            client_id=2,
            error="meter report service returned an error",
        )

    async def test_unexpected_exception_is_isolated(self) -> None:
        """Non-upstream errors are captured with a generic message."""

        async def lookup(_token: str, client_id: int | str) -> list[int]:
            if client_id == "bad":
                raise RuntimeError("boom")
            return [1]

        results = await fetch_reports(
            make_client(lookup), "tok", ["ok", "bad"], max_concurrency=2
        )

        assert isinstance(results[0], MeterReportSuccess)
        assert results[1] == MeterReportFailure(client_id="bad", error=GENERIC_FAILURE_MESSAGE)

    async def test_preserves_input_order(self) -> None:
        """Results follow input order even when completion order differs."""

        async def lookup(_token: str, client_id: int | str) -> int:
            # Earlier ids finish later
            await asyncio.sleep(0.01 * (5 - int(client_id)))
            return int(client_id)

        results = await fetch_reports(
            make_client(lookup), "tok", [1, 2, 3, 4], max_concurrency=4
        )

        assert [r.client_id for r in results] == [1, 2, 3, 4]

    async def test_concurrency_is_bounded(self) -> None:
        """No more than max_concurrency lookups are in flight at once."""
        in_flight = 0
        peak = 0

        async def lookup(_token: str, client_id: int | str) -> int | str:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return client_id

        results = await fetch_reports(
            make_client(lookup), "tok", list(range(10)), max_concurrency=3
        )

        assert len(results) == 10
        assert peak == 3

    async def test_token_forwarded_to_every_lookup(self) -> None:
        """Each lookup receives the caller's token."""
        client = make_client(None)
        client.get_mo_numbers.return_value = []

        await fetch_reports(client, "tok-123", [7, 8], max_concurrency=2)

        tokens = [call.args[0] for call in client.get_mo_numbers.call_args_list]
        assert tokens == ["tok-123", "tok-123"]
