"""Remote calls against the Jellyfin/Emby ``/Items`` API."""

from __future__ import annotations

import structlog

from jellyarr.domain.entities.catalog import CatalogItem, PlaybackSource
from jellyarr.domain.ports.transport import HttpTransportPort

from .mapping import parse_playback_info, parse_search_response

log = structlog.get_logger(__name__)

SERIES_FIELDS = "CanDownload,ParentId,MediaSources"
EPISODE_FIELDS = "MediaSources"


def build_authorization_header(api_key: str) -> dict[str, str]:
    """Return the MediaBrowser token header understood by Emby and Jellyfin."""
    return {"Authorization": f'MediaBrowser Token="{api_key}"'}


class MediaBrowserApi:
    """Thin typed wrapper over the four endpoints the search pipeline uses.

    Query parameter names and order match what the server's web client
    sends. Every call raises on failure; nothing is cached here.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        transport: HttpTransportPort,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport

    @property
    def _headers(self) -> dict[str, str]:
        return build_authorization_header(self._api_key)

    async def _items(self, params: dict[str, str]) -> list[CatalogItem]:
        data = await self._transport.get_json(
            f"{self.base_url}/Items",
            params=params,
            headers=self._headers,
        )
        return parse_search_response(data)

    async def search_series(self, search_term: str) -> list[CatalogItem]:
        items = await self._items(
            {
                "searchTerm": search_term,
                "includeItemTypes": "Series",
                "fields": SERIES_FIELDS,
                "enableImages": "true",
            }
        )
        log.debug("mediaserver_series_fetched", search_term=search_term, count=len(items))
        return items

    async def list_seasons(self, series_id: str) -> list[CatalogItem]:
        items = await self._items(
            {
                "parentId": series_id,
                "includeItemTypes": "Season",
                "enableImages": "true",
            }
        )
        log.debug("mediaserver_seasons_fetched", parent_id=series_id, count=len(items))
        return items

    async def list_episodes(self, parent_id: str) -> list[CatalogItem]:
        """List episodes under a season, or directly under a series."""
        items = await self._items(
            {
                "parentId": parent_id,
                "includeItemTypes": "Episode",
                "fields": EPISODE_FIELDS,
                "enableImages": "true",
            }
        )
        log.debug("mediaserver_episodes_fetched", parent_id=parent_id, count=len(items))
        return items

    async def playback_info(self, item_id: str) -> list[PlaybackSource]:
        data = await self._transport.get_json(
            f"{self.base_url}/Items/{item_id}/PlaybackInfo",
            headers=self._headers,
        )
        return parse_playback_info(data)
