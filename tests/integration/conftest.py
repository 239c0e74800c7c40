"""
Shared fixtures for integration tests.

Integration tests use the real gateway application with HTTP-level mocking
of the upstream services. These tests verify the full request -> forwarding
-> response cycle without any network access.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import respx
import yaml
from fastapi.testclient import TestClient

from meter_gateway.app import create_app
from meter_gateway.config import clear_settings_cache

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

CONFIG_FILE = Path(__file__).resolve().parents[2] / "config.yaml"


@pytest.fixture
def upstream() -> Iterator[respx.MockRouter]:
    """
    Intercept all outbound HTTP calls.

    Any upstream call a test did not mock fails the request loudly.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def client(upstream: respx.MockRouter) -> Iterator[TestClient]:  # noqa: ARG001 - fixture required
    """
    Create test client with the real gateway application.

    Uses context manager to trigger lifespan events (client initialization).
    """
    app = create_app()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def client_with_config(
    upstream: respx.MockRouter,  # noqa: ARG001 - fixture required
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[dict[str, dict[str, Any]]], Any]:
    """
    Build a test client from config.yaml with per-section overrides.

    Usage:
        with client_with_config({"errors": {"expose_details": True}}) as c:
            ...
    """

    @contextmanager
    def factory(overrides: dict[str, dict[str, Any]]) -> Iterator[TestClient]:
        config = yaml.safe_load(CONFIG_FILE.read_text())
        for section, values in overrides.items():
            config[section].update(values)

        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump(config))
        monkeypatch.setenv("CONFIG_PATH", str(config_file))
        clear_settings_cache()

        app = create_app()
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

    return factory
