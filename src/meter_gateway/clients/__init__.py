"""HTTP clients for upstream services."""

from meter_gateway.clients.auth import AuthClient
from meter_gateway.clients.base import UpstreamClient
from meter_gateway.clients.meter_reports import MeterReportClient
from meter_gateway.clients.registry import ClientRegistryClient

__all__ = [
    "AuthClient",
    "ClientRegistryClient",
    "MeterReportClient",
    "UpstreamClient",
]
