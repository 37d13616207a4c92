"""Media search use cases.

Subject names -> media source fetch -> (optionally limited) match list.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

import structlog

from jellyarr.domain.entities.media import (
    ConnectionStatus,
    MediaFetchRequest,
    MediaMatch,
    as_subject_names,
)
from jellyarr.domain.sources.base import MediaSourceProtocol

log = structlog.get_logger(__name__)


class MediaSearchUseCase:
    def __init__(self, *, source: MediaSourceProtocol) -> None:
        self._source = source

    async def execute(
        self,
        subject_names: Sequence[str] | str,
        *,
        episode_sort: int | None = None,
        limit: int | None = None,
    ) -> list[MediaMatch]:
        """Run one query and collect its matches.

        With *limit* set, consumption stops early and no further remote
        calls are issued. Failures propagate; no partial list is returned.
        """
        names = tuple(n for n in as_subject_names(subject_names) if n.strip())
        if not names:
            return []

        query = MediaFetchRequest(subject_names=names, episode_sort=episode_sort)
        t0 = time.perf_counter_ns()
        results = await self._source.fetch(query)
        matches = await results.to_list(limit=limit)

        log.info(
            "media_search_done",
            source=self._source.media_source_id,
            subject_names=list(names),
            episode_sort=episode_sort,
            count=len(matches),
            duration_ms=round((time.perf_counter_ns() - t0) / 1e6, 1),
        )
        return matches


class ConnectionCheckUseCase:
    def __init__(self, *, source: MediaSourceProtocol) -> None:
        self._source = source

    async def execute(self) -> ConnectionStatus:
        status = await self._source.check_connection()
        log.info(
            "connection_check_done",
            source=self._source.media_source_id,
            status=status.value,
        )
        return status
