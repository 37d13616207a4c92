"""Shared test fixtures for Jellyarr test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from jellyarr.infrastructure.config.schema import MediaServerConfig
from jellyarr.infrastructure.http import HttpxTransport

BASE_URL = "http://media.local:8096"
API_KEY = "test-api-key-123"
USER_ID = "cc91f58d951648829c90115520f6adec"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def server_config() -> MediaServerConfig:
    """Emby server config pointing at the respx-mocked base URL."""
    return MediaServerConfig(
        flavour="emby",
        base_url=BASE_URL + "/",
        user_id=USER_ID,
        api_key=API_KEY,
    )


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def transport(http_client: httpx.AsyncClient) -> HttpxTransport:
    return HttpxTransport(http_client=http_client)


@pytest.fixture()
def mock_transport() -> AsyncMock:
    """Mock HttpTransportPort."""
    mock = AsyncMock()
    mock.get_json = AsyncMock(return_value={"Items": []})
    mock.aclose = AsyncMock()
    return mock
