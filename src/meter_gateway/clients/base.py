"""
Base HTTP client for upstream services.

Builds outbound requests (bearer token, tenant header, accept type) and
normalizes upstream failures into UpstreamError.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from meter_gateway.core.exceptions import UpstreamError
from meter_gateway.logging import get_logger

TENANT_HEADER = "Abp.TenantId"


class UpstreamClient:
    """
    Base class for upstream service clients.

    One instance wraps one httpx.AsyncClient bound to a single upstream
    base URL. Requests are issued exactly once; there is no retry.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        service_name: str,
        tenant_id: str,
        expose_details: bool,
    ) -> None:
        """
        Initialize the upstream client.

        Args:
            base_url: Base URL for the upstream (e.g., "https://api.example.com/client")
            timeout: Request timeout in seconds
            service_name: Name of the upstream for logging and error messages
            tenant_id: Value sent in the tenant header on every request
            expose_details: Whether transport error text is included in error details
        """
        self.base_url = base_url
        self.service_name = service_name
        self.timeout = timeout
        self.tenant_id = tenant_id
        self.expose_details = expose_details

        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def _build_headers(
        self,
        token: str | None,
        extra_headers: dict[str, str] | None,
    ) -> dict[str, str]:
        """Assemble outbound headers: accept, tenant, optional bearer token."""
        headers = {
            "accept": "application/json",
            TENANT_HEADER: self.tenant_id,
        }
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Issue one outbound request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            token: Bearer token to forward, if any
            headers: Headers overriding the defaults
            **kwargs: Additional arguments passed to httpx (params, json, content)

        Returns:
            The raw upstream response, whatever its status

        Raises:
            UpstreamError: 500 if the upstream could not be reached
        """
        logger = get_logger()

        try:
            response = await self.client.request(
                method,
                path,
                headers=self._build_headers(token, headers),
                **kwargs,
            )
        except httpx.TransportError as e:
            reason = "timeout" if isinstance(e, httpx.TimeoutException) else "transport_error"
            logger.warning(
                "Upstream unreachable",
                extra={
                    "upstream": self.service_name,
                    "path": path,
                    "reason": reason,
                    "error_type": type(e).__name__,
                },
            )
            details: dict[str, object] = {"upstream": self.service_name}
            if self.expose_details:
                details["reason"] = str(e)
            raise UpstreamError(
                error="upstream_unavailable",
                message=f"Failed to reach {self.service_name} server",
                status_code=500,
                details=details,
            ) from e

        logger.debug(
            "Upstream responded",
            extra={
                "upstream": self.service_name,
                "method": method,
                "path": path,
                "status_code": response.status_code,
            },
        )
        return response

    def _parse_json(
        self,
        response: httpx.Response,
        path: str,
        allow_empty: bool = True,
    ) -> Any:
        """
        Parse an upstream response body as JSON.

        An empty body parses to None when allow_empty is set.

        Raises:
            UpstreamError: 500 if the body is not valid JSON
        """
        if allow_empty and not response.content:
            return None

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            get_logger().warning(
                "Upstream returned invalid JSON",
                extra={
                    "upstream": self.service_name,
                    "path": path,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise UpstreamError(
                error="invalid_upstream_json",
                message=f"Invalid JSON returned from {self.service_name} API",
                status_code=500,
                details={"upstream": self.service_name},
            ) from e

    async def _forward(
        self,
        method: str,
        path: str,
        *,
        token: str,
        **kwargs: Any,
    ) -> Any:
        """
        Forward a request and return the parsed success body.

        Raises:
            UpstreamError: With the upstream's own status code on non-2xx,
                or 500 on transport and parse failures
        """
        response = await self._send(method, path, token=token, **kwargs)

        if not response.is_success:
            get_logger().warning(
                "Upstream error",
                extra={
                    "upstream": self.service_name,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise UpstreamError(
                error="upstream_error",
                message=f"{self.service_name} service returned an error",
                status_code=response.status_code,
                details={
                    "upstream": self.service_name,
                    "upstream_status": response.status_code,
                    "upstream_body": response.text,
                },
            )

        return self._parse_json(response, path)
