"""
Configuration management for the meter gateway.

Loads configuration from YAML with ZERO in-code defaults.
Every value must be explicitly specified or startup fails. A small set of
environment variables may override individual values on top of the file.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    version: str


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str
    port: int
    log_level: str
    cors_origins: list[str]


class UpstreamsConfig(BaseModel):
    """Upstream service URLs, tenant header and timeout."""

    model_config = ConfigDict(extra="forbid")

    auth_url: str
    clients_url: str
    meter_reports_url: str
    tenant_id: str
    timeout_seconds: float = Field(gt=0)


class ClientsConfig(BaseModel):
    """Client-registry forwarding behaviour."""

    model_config = ConfigDict(extra="forbid")

    bypass_pagination: bool
    max_result_count: int = Field(gt=0)


class MeterReportsConfig(BaseModel):
    """Meter-report forwarding behaviour."""

    model_config = ConfigDict(extra="forbid")

    client_id_param: str = Field(min_length=1)
    max_concurrency: int = Field(gt=0)


class ErrorsConfig(BaseModel):
    """Error response policy."""

    model_config = ConfigDict(extra="forbid")

    expose_details: bool


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.

    Usage:
        from meter_gateway.config import get_settings
        settings = get_settings()
    """

    model_config = ConfigDict(extra="forbid")

    service: ServiceConfig
    server: ServerConfig
    upstreams: UpstreamsConfig
    clients: ClientsConfig
    meter_reports: MeterReportsConfig
    errors: ErrorsConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


# Environment variable -> (section, key) it overrides
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "PORT": ("server", "port"),
    "API_BASE_URL": ("upstreams", "auth_url"),
    "CLIENT_API_BASE_URL": ("upstreams", "clients_url"),
    "METER_REPORT_API_BASE_URL": ("upstreams", "meter_reports_url"),
}


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load and parse YAML configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigurationError: If file is missing, empty, or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Create the file or set CONFIG_PATH environment variable."
        )

    try:
        with config_path.open() as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"All configuration values must be explicitly specified."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}"
        )

    return config


def apply_env_overrides(
    config: dict[str, Any],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """
    Overlay environment variables onto a raw configuration mapping.

    Only variables listed in ENV_OVERRIDES are considered. Empty values
    are ignored so an exported-but-blank variable does not wipe the file value.

    Args:
        config: Parsed YAML configuration
        environ: Environment mapping (usually os.environ)

    Returns:
        New configuration dictionary with overrides applied
    """
    result = {
        key: dict(value) if isinstance(value, dict) else value for key, value in config.items()
    }

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        target = result.get(section)
        if not isinstance(target, dict):
            target = {}
            result[section] = target
        target[key] = value

    return result


def get_config_path() -> Path:
    """
    Determine configuration file path.

    Uses CONFIG_PATH environment variable if set, otherwise defaults
    to ./config.yaml relative to working directory.
    """
    config_path_str = os.environ.get("CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate configuration.

    Cached to ensure single instance across application.
    Called once at startup - fails fast on invalid config.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: Config file missing or invalid
    """
    config_path = get_config_path()
    yaml_config = apply_env_overrides(load_yaml_config(config_path), os.environ)

    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"All configuration values must be explicitly specified.\n"
            f"No default values are allowed."
        ) from e


def clear_settings_cache() -> None:
    """Clear the settings cache. Used in testing."""
    get_settings.cache_clear()


# Keywords that indicate sensitive data (case-insensitive)
SENSITIVE_KEYWORDS: frozenset[str] = frozenset(
    {
        "secret",
        "pass",
        "password",
        "token",
        "credential",
        "api_key",
        "apikey",
        "private",
        "bearer",
    }
)

_SENSITIVE_PATTERN = re.compile(
    r"(" + "|".join(re.escape(kw) for kw in SENSITIVE_KEYWORDS) + r")",
    re.IGNORECASE,
)

REDACTION_MARKER: str = "[REDACTED]"


def is_sensitive_key(key: str) -> bool:
    """Check if a configuration key contains sensitive keywords."""
    return bool(_SENSITIVE_PATTERN.search(key))


def redact_sensitive_values(
    data: dict[str, Any],
    redaction_marker: str,
) -> dict[str, Any]:
    """
    Recursively redact sensitive values from configuration.

    Used by /info endpoint to safely expose configuration.

    Args:
        data: Configuration dictionary
        redaction_marker: String to replace sensitive values

    Returns:
        New dictionary with sensitive values redacted
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(key):
            result[key] = redaction_marker
        elif isinstance(value, dict):
            result[key] = redact_sensitive_values(value, redaction_marker)
        elif isinstance(value, list):
            result[key] = [
                redact_sensitive_values(item, redaction_marker) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def get_safe_config() -> dict[str, Any]:
    """
    Get configuration with sensitive values redacted.

    Returns:
        Configuration dictionary safe for logging/API exposure
    """
    settings = get_settings()
    raw_config = settings.model_dump()
    return redact_sensitive_values(raw_config, REDACTION_MARKER)
