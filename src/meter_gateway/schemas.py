"""
Pydantic request/response models for the meter gateway API.

Upstream payloads are opaque and relayed as-is; only the gateway's own
request bodies and responses are modelled here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# === Request Models ===


class LoginRequest(BaseModel):
    """Request model for POST /api/login and /api/loginV2."""

    userNameOrEmailAddress: str | None = None  # noqa: N815 - wire field name
    """User name or e-mail address."""

    password: str | None = None
    """Plain-text password."""


class MeterReportsRequest(BaseModel):
    """Request model for POST /proxy/meter-reports."""

    model_config = ConfigDict(populate_by_name=True)

    client_ids: list[int | str] | None = Field(default=None, alias="clientIds")
    """Client identifiers to fetch MO numbers for."""


# === Response Models ===


class MeterReportSuccess(BaseModel):
    """Per-client result when the upstream call succeeded."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    client_id: int | str = Field(alias="clientId")
    data: Any


class MeterReportFailure(BaseModel):
    """Per-client result when the upstream call failed."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    client_id: int | str = Field(alias="clientId")
    error: str


class MeterReportsResponse(BaseModel):
    """Response model for POST /proxy/meter-reports."""

    reports: list[MeterReportSuccess | MeterReportFailure]
    """One entry per requested client id, in request order."""


class HealthResponse(BaseModel):
    """Response model for GET /health endpoint."""

    status: str
    message: str


class UpstreamsInfo(BaseModel):
    """Configured upstream base URLs."""

    auth: str
    clients: str
    meter_reports: str


class InfoResponse(BaseModel):
    """Response model for GET /info endpoint."""

    service: str
    version: str
    uptime: str
    uptime_seconds: float
    upstreams: UpstreamsInfo
    config: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
