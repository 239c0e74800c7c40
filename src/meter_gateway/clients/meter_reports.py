"""
Client for the meter-report service.

Looks up MO numbers registered for a client.
"""

from __future__ import annotations

from typing import Any

from meter_gateway.clients.base import UpstreamClient

MO_NUMBERS_PATH = "/api/v1/MeterReportService/GetMONumbersByClient"


class MeterReportClient(UpstreamClient):
    """Client for the meter-report service."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        service_name: str,
        tenant_id: str,
        expose_details: bool,
        client_id_param: str,
    ) -> None:
        """
        Initialize the meter-report client.

        Args:
            client_id_param: Query parameter name the upstream expects for
                the client identifier (e.g. "Id" or "clientId")

        Other arguments are as for UpstreamClient.
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            service_name=service_name,
            tenant_id=tenant_id,
            expose_details=expose_details,
        )
        self.client_id_param = client_id_param

    async def get_mo_numbers(self, token: str, client_id: int | str) -> Any:
        """
        Fetch MO numbers for one client.

        Args:
            token: Caller's bearer token
            client_id: Client identifier, sent verbatim as a query value

        Returns:
            Upstream response body
        """
        return await self._forward(
            "GET",
            MO_NUMBERS_PATH,
            token=token,
            params={self.client_id_param: str(client_id)},
        )
