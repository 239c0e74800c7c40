"""
Client for the authentication service.

Exchanges user credentials for an access token.
"""

from __future__ import annotations

import json
from typing import Any

from meter_gateway.clients.base import UpstreamClient

AUTHENTICATE_PATH = "/api/TokenAuth/Authenticate"


class AuthClient(UpstreamClient):
    """
    Client for the authentication service.

    Unlike the resource clients, the upstream status code is returned to
    the caller rather than turned into an error.
    """

    async def authenticate(
        self,
        user_name_or_email: str,
        password: str,
    ) -> tuple[int, Any]:
        """
        Authenticate a user against the upstream token endpoint.

        Args:
            user_name_or_email: User name or e-mail address
            password: Plain-text password

        Returns:
            Tuple of (upstream status code, parsed JSON body)

        Raises:
            UpstreamError: 500 if unreachable or the body is not JSON
        """
        payload = {
            "userNameOrEmailAddress": user_name_or_email,
            "password": password,
            "rememberClient": False,
        }
        response = await self._send(
            "POST",
            AUTHENTICATE_PATH,
            headers={
                "accept": "text/plain",
                "Content-Type": "application/json-patch+json",
            },
            content=json.dumps(payload),
        )
        data = self._parse_json(response, AUTHENTICATE_PATH, allow_empty=False)
        return response.status_code, data
