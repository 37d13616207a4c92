"""Walk series -> seasons -> episodes for a list of subject names."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence

import structlog

from jellyarr.domain.entities.catalog import CatalogItem

from .api import MediaBrowserApi
from .hierarchy_cache import HierarchyCache

log = structlog.get_logger(__name__)


class CatalogWalker:
    """Lazily resolves subject names to downloadable episode candidates.

    Per subject name:
    1. Series search (cached by name), keep series whose name contains it.
    2. Seasons per series (cached by series id), same name filter.
       - No season left: all episodes directly under the series (cached by
         series id), without a name filter.
       - Otherwise: episodes per season (cached by season id), name filter.
    3. Keep only ``Episode`` items with ``CanDownload`` set.

    Output order follows subject names, then server order at every level.
    Remote calls for a branch happen only when iteration reaches it; any
    failure aborts the walk.
    """

    def __init__(self, api: MediaBrowserApi, cache: HierarchyCache) -> None:
        self._api = api
        self._cache = cache

    async def search(self, subject_names: Sequence[str]) -> AsyncIterator[CatalogItem]:
        for subject_name in subject_names:
            async for item in self._walk_subject(subject_name):
                if item.is_downloadable_episode:
                    yield item
                else:
                    log.debug(
                        "catalog_walker_item_skipped",
                        item_id=item.id,
                        type=item.raw_type,
                        can_download=item.can_download,
                    )

    async def _walk_subject(self, subject_name: str) -> AsyncIterator[CatalogItem]:
        series_list = await self._cache.get_or_fetch(
            subject_name,
            "series",
            lambda: self._api.search_series(subject_name),
        )
        for series in series_list:
            if not series.name_contains(subject_name):
                continue
            async for item in self._walk_series(series, subject_name):
                yield item

    async def _walk_series(
        self, series: CatalogItem, subject_name: str
    ) -> AsyncIterator[CatalogItem]:
        seasons = await self._cache.get_or_fetch(
            series.id,
            "seasons",
            lambda: self._api.list_seasons(series.id),
        )
        seasons = [s for s in seasons if s.name_contains(subject_name)]

        if not seasons:
            log.debug("catalog_walker_series_fallback", series_id=series.id)
            episodes = await self._cache.get_or_fetch(
                series.id,
                "episodes",
                lambda: self._api.list_episodes(series.id),
            )
            for episode in episodes:
                yield episode
            return

        for season in seasons:
            episodes = await self._cache.get_or_fetch(
                season.id,
                "episodes",
                lambda season_id=season.id: self._api.list_episodes(season_id),
            )
            for episode in episodes:
                if episode.name_contains(subject_name):
                    yield episode
