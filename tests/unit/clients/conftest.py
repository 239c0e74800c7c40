"""Fixtures for client unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from meter_gateway.clients import (
        AuthClient,
        ClientRegistryClient,
        MeterReportClient,
        UpstreamClient,
    )


@pytest.fixture
def mock_httpx_client() -> AsyncMock:
    """Create a mock httpx.AsyncClient for testing client methods."""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
async def upstream_client(mock_httpx_client: AsyncMock) -> AsyncGenerator[UpstreamClient, None]:
    """Create a generic UpstreamClient with a mocked httpx client."""
    from meter_gateway.clients import UpstreamClient  # noqa: PLC0415

    client = UpstreamClient(
        base_url="https://upstream.test",
        timeout=30.0,
        service_name="test",
        tenant_id="1",
        expose_details=False,
    )
    # Replace the internal httpx client with our mock
    client.client = mock_httpx_client
    yield client


@pytest.fixture
async def auth_client(mock_httpx_client: AsyncMock) -> AsyncGenerator[AuthClient, None]:
    """Create an AuthClient with a mocked httpx client."""
    from meter_gateway.clients import AuthClient  # noqa: PLC0415

    client = AuthClient(
        base_url="https://auth.test",
        timeout=30.0,
        service_name="auth",
        tenant_id="1",
        expose_details=False,
    )
    client.client = mock_httpx_client
    yield client


@pytest.fixture
async def registry_client(
    mock_httpx_client: AsyncMock,
) -> AsyncGenerator[ClientRegistryClient, None]:
    """Create a ClientRegistryClient with a mocked httpx client."""
    from meter_gateway.clients import ClientRegistryClient  # noqa: PLC0415

    client = ClientRegistryClient(
        base_url="https://clients.test",
        timeout=30.0,
        service_name="clients",
        tenant_id="1",
        expose_details=False,
    )
    client.client = mock_httpx_client
    yield client


@pytest.fixture
async def meter_report_client(
    mock_httpx_client: AsyncMock,
) -> AsyncGenerator[MeterReportClient, None]:
    """Create a MeterReportClient with a mocked httpx client."""
    from meter_gateway.clients import MeterReportClient  # noqa: PLC0415

    client = MeterReportClient(
        base_url="https://meter.test",
        timeout=30.0,
        service_name="meter report",
        tenant_id="1",
        expose_details=False,
        client_id_param="Id",
    )
    client.client = mock_httpx_client
    yield client
