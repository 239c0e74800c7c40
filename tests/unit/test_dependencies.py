"""Tests for shared route dependencies."""

from __future__ import annotations

import pytest

from meter_gateway.core.exceptions import ServiceError
from meter_gateway.routers.dependencies import extract_bearer_token, require_bearer_token


@pytest.mark.unit
class TestExtractBearerToken:
    """Tests for extract_bearer_token."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("  Bearer   abc  ", "abc"),
            ("abc", "abc"),
            ("Bearer ", None),
            ("Bearer", None),
            ("BEARER   ", None),
            ("", None),
            ("   ", None),
            (None, None),
        ],
    )
    def test_extraction(self, header: str | None, expected: str | None) -> None:
        """Prefix is stripped; blank values yield None."""
        assert extract_bearer_token(header) == expected


@pytest.mark.unit
class TestRequireBearerToken:
    """Tests for require_bearer_token."""

    async def test_returns_token(self) -> None:
        """A valid header yields the bare token."""
        assert await require_bearer_token("Bearer tok") == "tok"

    async def test_missing_header_raises_401(self) -> None:
        """No header is a 401."""
        with pytest.raises(ServiceError) as exc_info:
            await require_bearer_token(None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.error == "unauthorized"

    async def test_bare_scheme_raises_401(self) -> None:
        """``Bearer`` with no token after it is a 401."""
        with pytest.raises(ServiceError) as exc_info:
            await require_bearer_token("Bearer")

        assert exc_info.value.status_code == 401
