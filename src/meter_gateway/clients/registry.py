"""
Client for the client-registry service.

Lists, reads, creates, updates and deletes registered clients.
"""

from __future__ import annotations

from typing import Any

from meter_gateway.clients.base import UpstreamClient

GET_ALL_PATH = "/api/v1/Client/GetAll"
GET_ALL_MOBY_PATH = "/api/v1/Client/GetAllMobyClients"
GET_PATH = "/api/v1/Client/Get"
CREATE_PATH = "/api/v1/Client/Create"
UPDATE_PATH = "/api/v1/Client/Update"
DELETE_PATH = "/api/v1/Client/Delete"


def unwrap_items(data: Any) -> Any:
    """
    Strip a paged-result envelope from a list response.

    Tries ``items``, then ``result.items``, then ``result``, then the body
    itself. A missing body becomes an empty list.
    """
    if isinstance(data, dict):
        items = data.get("items")
        if items is not None:
            return items

        result = data.get("result")
        if isinstance(result, dict) and result.get("items") is not None:
            return result["items"]
        if result is not None:
            return result

    if data is None:
        return []
    return data


class ClientRegistryClient(UpstreamClient):
    """
    Client for the client-registry service.

    All methods forward the caller's bearer token and return the parsed
    upstream body unchanged.
    """

    # nosemgrep: no-default-parameter-values (None means "let upstream paginate")
    async def list_clients(
        self,
        token: str,
        max_result_count: int | None = None,
    ) -> Any:
        """
        List registered clients.

        Args:
            token: Caller's bearer token
            max_result_count: When set, sent as maxResultCount to force a
                single page holding the full list

        Returns:
            Upstream response body
        """
        params: dict[str, Any] = {}
        if max_result_count is not None:
            params["maxResultCount"] = max_result_count
        return await self._forward("GET", GET_ALL_PATH, token=token, params=params)

    async def list_moby_clients(self, token: str) -> Any:
        """List clients registered through the Moby channel."""
        return await self._forward("GET", GET_ALL_MOBY_PATH, token=token)

    async def get_client(self, token: str, client_id: str) -> Any:
        """Fetch a single client by id."""
        return await self._forward("GET", GET_PATH, token=token, params={"Id": client_id})

    async def create_client(self, token: str, payload: Any) -> Any:
        """Create a client from the caller's JSON payload."""
        return await self._forward("POST", CREATE_PATH, token=token, json=payload)

    async def update_client(self, token: str, client_id: str, payload: Any) -> Any:
        """Update a client; the payload is forwarded unchanged."""
        return await self._forward(
            "PUT",
            UPDATE_PATH,
            token=token,
            params={"Id": client_id},
            json=payload,
        )

    async def delete_client(self, token: str, client_id: str) -> Any:
        """Delete a client by id."""
        return await self._forward("DELETE", DELETE_PATH, token=token, params={"Id": client_id})
