"""In-memory caches for the series -> season -> episode hierarchy."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Literal

import structlog

from jellyarr.domain.entities.catalog import CatalogItem

log = structlog.get_logger(__name__)

CacheLevel = Literal["series", "seasons", "episodes"]
CatalogFetch = Callable[[], Awaitable[list[CatalogItem]]]


class HierarchyCache:
    """Three independent key -> item-list stores.

    Keys are a search term (series) or a parent item id (seasons,
    episodes). Entries are never invalidated one by one, only ``clear()``
    removes them.

    All access happens on the event loop thread, so plain dicts need no
    lock. ``get_or_fetch`` is not single-flight: two tasks missing the
    same key both call the remote fetch and the last writer wins.
    """

    def __init__(self) -> None:
        self._stores: dict[CacheLevel, dict[str, list[CatalogItem]]] = {
            "series": {},
            "seasons": {},
            "episodes": {},
        }

    def store(self, level: CacheLevel) -> dict[str, list[CatalogItem]]:
        return self._stores[level]

    def contains(self, level: CacheLevel, key: str) -> bool:
        return key in self._stores[level]

    def size(self, level: CacheLevel) -> int:
        return len(self._stores[level])

    async def get_or_fetch(
        self,
        key: str,
        level: CacheLevel,
        fetch: CatalogFetch,
    ) -> list[CatalogItem]:
        """Return the cached list for *key* or fetch, store and return it.

        A failing *fetch* stores nothing and propagates its exception.
        """
        store = self._stores[level]
        cached = store.get(key)
        if cached is not None:
            log.debug("hierarchy_cache_hit", level=level, key=key)
            return cached

        items = await fetch()
        store[key] = items
        log.debug("hierarchy_cache_stored", level=level, key=key, count=len(items))
        return items

    def clear(self) -> None:
        """Empty all three stores (each one independently)."""
        for store in self._stores.values():
            store.clear()
        log.info("hierarchy_cache_cleared")
