"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

from __future__ import annotations

from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest

from gcreds.config import clear_settings
from tests.constants import GOOGLE_RESPONSE


@dataclass
class FakeRequest:
    """Minimal request exposing query parameters and headers."""

    query_params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


def make_response(status_code: int = 200, json_data: object = None, content: bytes = b"") -> MagicMock:
    """Create a mock httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


def patch_client(mock_client: MagicMock) -> AsyncMock:
    """Make a patched httpx.AsyncClient return a controllable instance."""
    mock_instance = AsyncMock()
    mock_instance.is_closed = False
    mock_client.return_value = mock_instance
    return mock_instance


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from GCREDS_* variables and cached settings."""
    for name in (
        "GCREDS_CONFIG_FILE",
        "GCREDS_GOOGLE__CLIENT_ID",
        "GCREDS_GOOGLE__CLIENT_SECRET",
        "GCREDS_GOOGLE__CALLBACK_URL",
        "GCREDS_GOOGLE__CACHE_SIZE",
        "GCREDS_LOG__LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings()
    yield
    clear_settings()


@pytest.fixture()
def mock_provider() -> MagicMock:
    """Create a mock GoogleProvider."""
    provider = MagicMock()
    provider.name = "Google"
    provider.build_authorize_url.return_value = (
        "https://accounts.google.com/o/oauth2/auth?client_id=cid"
        "&redirect_uri=http%3A%2F%2Flocalhost%3A8080%2Fauth%2Fgoogle"
        "&scope=profile&response_type=code"
    )
    provider.exchange_code = AsyncMock(return_value="at_test123")
    provider.get_userinfo = AsyncMock(
        return_value={"sub": "123456789012345678901", "name": "John Doe"}
    )
    provider.get_profile_payload = AsyncMock(return_value=GOOGLE_RESPONSE)
    provider.close = AsyncMock()
    return provider
