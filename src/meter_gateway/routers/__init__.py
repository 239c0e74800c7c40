"""API routers for the meter gateway."""

from meter_gateway.routers import auth, clients, health, info, meter_reports

__all__ = ["auth", "clients", "health", "info", "meter_reports"]
