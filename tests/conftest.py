"""
Shared test configuration and fixtures.

This file contains pytest configuration that applies to all tests,
both unit and integration. Test-type-specific fixtures are defined
in their respective conftest.py files:
- tests/unit/clients/conftest.py - Clients with a mocked httpx transport
- tests/integration/conftest.py - Real app with respx-mocked upstreams
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from meter_gateway.config import ENV_OVERRIDES, clear_settings_cache

if TYPE_CHECKING:
    from collections.abc import Iterator

CONFIG_FILE = Path(__file__).resolve().parents[1] / "config.yaml"

# Point every test at the repository config, independent of the working directory
os.environ["CONFIG_PATH"] = str(CONFIG_FILE)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop environment overrides and start each test with fresh settings."""
    for env_name in ENV_OVERRIDES:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("CONFIG_PATH", str(CONFIG_FILE))
    clear_settings_cache()
    yield
    clear_settings_cache()
