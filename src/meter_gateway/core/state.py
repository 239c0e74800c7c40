"""
Application state management.

Tracks runtime state like uptime, and stores upstream client instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meter_gateway.clients import AuthClient, ClientRegistryClient, MeterReportClient


@dataclass
class AppState:
    """
    Runtime application state.

    Attributes:
        start_time: When the application started (UTC)
        _auth_client: HTTP client for the authentication service (internal)
        _registry_client: HTTP client for the client-registry service (internal)
        _meter_report_client: HTTP client for the meter-report service (internal)
    """

    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    _auth_client: AuthClient | None = field(default=None, repr=False)
    _registry_client: ClientRegistryClient | None = field(default=None, repr=False)
    _meter_report_client: MeterReportClient | None = field(default=None, repr=False)

    @property
    def auth_client(self) -> AuthClient:
        """Get the auth client. Raises RuntimeError if not initialized."""
        if self._auth_client is None:
            raise RuntimeError("Auth client not initialized")
        return self._auth_client

    @auth_client.setter
    def auth_client(self, value: AuthClient) -> None:
        self._auth_client = value

    @property
    def registry_client(self) -> ClientRegistryClient:
        """Get the client-registry client. Raises RuntimeError if not initialized."""
        if self._registry_client is None:
            raise RuntimeError("Client registry client not initialized")
        return self._registry_client

    @registry_client.setter
    def registry_client(self, value: ClientRegistryClient) -> None:
        self._registry_client = value

    @property
    def meter_report_client(self) -> MeterReportClient:
        """Get the meter-report client. Raises RuntimeError if not initialized."""
        if self._meter_report_client is None:
            raise RuntimeError("Meter report client not initialized")
        return self._meter_report_client

    @meter_report_client.setter
    def meter_report_client(self, value: MeterReportClient) -> None:
        self._meter_report_client = value

    @property
    def uptime_seconds(self) -> float:
        """Calculate uptime in seconds."""
        now = datetime.now(UTC)
        delta = now - self.start_time
        return delta.total_seconds()

    @property
    def uptime_formatted(self) -> str:
        """
        Format uptime as human-readable string.

        Returns:
            String like "2d 3h 15m 42s" or "15m 42s"
        """
        seconds = int(self.uptime_seconds)
        days, remainder = divmod(seconds, 86400)
        hours, remainder = divmod(remainder, 3600)
        minutes, secs = divmod(remainder, 60)

        parts = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        parts.append(f"{secs}s")

        return " ".join(parts)

    async def close_clients(self) -> None:
        """Close every initialized upstream client."""
        for client in (self._auth_client, self._registry_client, self._meter_report_client):
            if client is not None:
                await client.close()


# Global application state instance
# Initialized in lifespan context
_app_state: AppState | None = None


def get_app_state() -> AppState:
    """
    Get the current application state.

    Raises:
        RuntimeError: If called before app startup
    """
    if _app_state is None:
        raise RuntimeError("Application state not initialized")
    return _app_state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    global _app_state  # noqa: PLW0603 - intentional singleton pattern
    _app_state = AppState()
    return _app_state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    global _app_state  # noqa: PLW0603 - intentional singleton pattern
    _app_state = None
