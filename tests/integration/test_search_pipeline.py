"""End-to-end search through build_services with a respx-mocked server."""

from __future__ import annotations

import httpx
import pytest
import respx

from jellyarr.domain.entities.media import ConnectionStatus
from jellyarr.infrastructure.config.schema import AppConfig
from jellyarr.interfaces.composition import build_services

pytestmark = pytest.mark.integration

_BASE = "http://emby.local:8096"


def _config() -> AppConfig:
    return AppConfig.model_validate(
        {"mediaserver": {"flavour": "emby", "base_url": _BASE, "api_key": "secret"}}
    )


def _items(request: httpx.Request) -> httpx.Response:
    params = request.url.params
    kind = params["includeItemTypes"]
    if kind == "Series":
        return httpx.Response(
            200,
            json={
                "Items": [
                    {"Id": "S1", "Name": "Frieren", "Type": "Series"},
                    {"Id": "S2", "Name": "Other Show", "Type": "Series"},
                ]
            },
        )
    if kind == "Season":
        return httpx.Response(
            200,
            json={"Items": [{"Id": "SE1", "Name": "Frieren S1", "Type": "Season"}]},
        )
    assert params["parentId"] == "SE1"
    return httpx.Response(
        200,
        json={
            "Items": [
                {
                    "Id": "E1",
                    "Name": "Frieren",
                    "Type": "Episode",
                    "SeasonName": "Frieren S1",
                    "IndexNumber": 1,
                    "CanDownload": True,
                },
                {
                    "Id": "E2",
                    "Name": "Frieren",
                    "Type": "Episode",
                    "IndexNumber": 2,
                    "CanDownload": False,
                },
            ]
        },
    )


class TestSearchPipeline:
    @pytest.mark.asyncio()
    async def test_search_and_shutdown(self, respx_mock: respx.MockRouter) -> None:
        respx_mock.get(f"{_BASE}/Items").mock(side_effect=_items)
        respx_mock.get(f"{_BASE}/Items/E1/PlaybackInfo").respond(
            json={
                "MediaSources": [
                    {"Id": "m1", "Name": "Frieren 2160p [JPN]", "Path": "/a/e1.mkv"}
                ]
            }
        )

        async with build_services(_config()) as services:
            matches = await services.search.execute(["Frieren"])
            source = services.source
            assert source.cache.size("series") == 1

        assert [m.media.original_title for m in matches] == ["1 Frieren"]
        media = matches[0].media
        assert media.properties.resolution == "2160P"
        assert media.properties.subtitle_language_ids == ("JPN",)
        assert services.shutdown_hooks.has_run is True
        assert source.cache.size("series") == 0

    @pytest.mark.asyncio()
    async def test_connection_check(self, respx_mock: respx.MockRouter) -> None:
        respx_mock.get(f"{_BASE}/Items").respond(status_code=401)

        async with build_services(_config()) as services:
            status = await services.connection_check.execute()

        assert status is ConnectionStatus.FAILED

    @pytest.mark.asyncio()
    async def test_injected_client_stays_open(self, respx_mock: respx.MockRouter) -> None:
        client = httpx.AsyncClient()

        async with build_services(_config(), http_client=client):
            pass

        assert client.is_closed is False
        await client.aclose()
