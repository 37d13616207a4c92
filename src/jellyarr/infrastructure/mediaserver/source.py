"""Jellyfin/Emby media sources.

``BaseJellyfinMediaSource`` holds the shared search pipeline; the concrete
classes only add identity and the download URI format of their server.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import ClassVar

import structlog

from jellyarr.domain.entities.media import (
    ConnectionStatus,
    MediaFetchRequest,
    MediaMatch,
    MediaSourceInfo,
    MediaSourceKind,
    SinglePageResults,
)
from jellyarr.domain.ports.lifecycle import ShutdownHooksPort
from jellyarr.domain.ports.transport import HttpTransportPort
from jellyarr.domain.sources.exceptions import MediaSourceConfigError
from jellyarr.infrastructure.config.schema import MediaServerConfig

from .api import MediaBrowserApi
from .catalog_walker import CatalogWalker
from .hierarchy_cache import HierarchyCache
from .match_assembler import MatchAssembler

CONNECTION_PROBE_TERM = "AA测试BB"


class BaseJellyfinMediaSource:
    """Shared base for MediaBrowser-API servers (Jellyfin, Emby).

    Subclasses **must** set:
    - ``ID`` (stable media source id)
    - ``INFO`` (display metadata)

    Subclasses **must** override:
    - ``get_download_uri()``
    """

    ID: ClassVar[str] = ""
    INFO: ClassVar[MediaSourceInfo] = MediaSourceInfo(display_name="")

    kind: MediaSourceKind = MediaSourceKind.WEB

    def __init__(
        self,
        config: MediaServerConfig,
        transport: HttpTransportPort,
        *,
        shutdown_hooks: ShutdownHooksPort | None = None,
    ) -> None:
        if not config.base_url:
            raise MediaSourceConfigError(f"{self.ID}: base_url is required")
        if not config.api_key:
            raise MediaSourceConfigError(f"{self.ID}: api_key is required")

        self.base_url: str = config.base_url.removesuffix("/")
        self.user_id: str = config.user_id
        self.api_key: str = config.api_key

        self._cache = HierarchyCache()
        self._api = MediaBrowserApi(
            base_url=self.base_url,
            api_key=self.api_key,
            transport=transport,
        )
        self._walker = CatalogWalker(self._api, self._cache)
        self._assembler = MatchAssembler(
            api=self._api,
            media_source_id=self.media_source_id,
            download_uri=self.get_download_uri,
        )
        self._log = structlog.get_logger(self.ID or __name__)

        if shutdown_hooks is not None:
            shutdown_hooks.add(self.clear_cache, name=f"{self.ID}_clear_cache")

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def media_source_id(self) -> str:
        return self.ID

    @property
    def info(self) -> MediaSourceInfo:
        return self.INFO

    @property
    def cache(self) -> HierarchyCache:
        return self._cache

    def get_download_uri(self, item_id: str) -> str:
        raise NotImplementedError(
            f"{type(self).__name__}.get_download_uri() not implemented"
        )

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Media source operations
    # ------------------------------------------------------------------

    async def check_connection(self) -> ConnectionStatus:
        """Probe the server with a throwaway series search."""
        try:
            await self._api.search_series(CONNECTION_PROBE_TERM)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            self._log.warning(
                f"{self.ID}_connection_failed",
                base_url=self.base_url,
                error=str(exc),
            )
            return ConnectionStatus.FAILED
        self._log.info(f"{self.ID}_connection_ok", base_url=self.base_url)
        return ConnectionStatus.SUCCESS

    async def fetch(self, query: MediaFetchRequest) -> SinglePageResults:
        """Return the lazily evaluated matches for *query*.

        Nothing is requested until the result is iterated.
        """
        return SinglePageResults(lambda: self._matches(query))

    async def _matches(self, query: MediaFetchRequest) -> AsyncGenerator[MediaMatch, None]:
        async with aclosing(self._walker.search(query.subject_names)) as candidates:
            async for item in candidates:
                match = await self._assembler.assemble(item)
                if match is None:
                    continue
                if match.matches(query) is False:
                    self._log.debug(
                        f"{self.ID}_match_rejected",
                        media_id=match.media.media_id,
                    )
                    continue
                yield match


class EmbyMediaSource(BaseJellyfinMediaSource):
    """Emby Media Server."""

    ID = "emby"
    INFO = MediaSourceInfo(
        display_name="Emby",
        description="Emby Media Server",
        website_url="https://emby.media",
        icon_url="https://emby.media/favicon-32x32.png",
    )

    def get_download_uri(self, item_id: str) -> str:
        return f"{self.base_url}/Videos/{item_id}/stream?api_key={self.api_key}"


class JellyfinMediaSource(BaseJellyfinMediaSource):
    """Jellyfin Media Server."""

    ID = "jellyfin"
    INFO = MediaSourceInfo(
        display_name="Jellyfin",
        description="Jellyfin Media Server",
        website_url="https://jellyfin.org",
        icon_url="https://jellyfin.org/images/favicon.ico",
    )

    def get_download_uri(self, item_id: str) -> str:
        return f"{self.base_url}/Items/{item_id}/Download?api_key={self.api_key}"
