"""Media-search entities shared by all media sources.

Pure value objects: no framework dependencies and no I/O.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator, Callable, Sequence
from contextlib import aclosing
from dataclasses import dataclass
from enum import Enum


class MatchKind(str, Enum):
    """How a match was found."""

    EXACT = "exact"
    FUZZY = "fuzzy"  # substring/heuristic match, not an id lookup


class MediaSourceLocation(str, Enum):
    ONLINE = "online"
    LAN = "local-network"
    LOCAL = "local"


class MediaSourceKind(str, Enum):
    WEB = "web"
    BITTORRENT = "bittorrent"
    LOCAL_CACHE = "local-cache"


class SubtitleKind(str, Enum):
    EMBEDDED = "embedded"
    CLOSED = "closed"
    EXTERNAL_PROVIDED = "external-provided"
    EXTERNAL_DISCOVER = "external-discover"


class ConnectionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class MediaSourceInfo:
    """Display metadata of a media source."""

    display_name: str
    description: str = ""
    website_url: str = ""
    icon_url: str = ""


@dataclass(frozen=True)
class EpisodeRange:
    """Which episodes a media item covers.

    ``sorts`` lists known episode numbers. ``season_unknown`` marks items
    (movies, whole-season packs) whose episode coverage cannot be told.
    """

    sorts: tuple[int, ...] = ()
    season_unknown: bool = False

    @classmethod
    def single(cls, sort: int) -> EpisodeRange:
        return cls(sorts=(sort,))

    @classmethod
    def unknown_season(cls) -> EpisodeRange:
        return cls(season_unknown=True)

    @property
    def known_sorts(self) -> tuple[int, ...]:
        return self.sorts

    def contains(self, sort: int) -> bool:
        return sort in self.sorts


@dataclass(frozen=True)
class Subtitle:
    """External subtitle file attached to a media item."""

    uri: str
    language: str | None = None
    mime_type: str = "application/octet-stream"
    label: str | None = None


@dataclass(frozen=True)
class ResourceLocation:
    """HTTP streaming file locator."""

    uri: str
    kind: str = "http-streaming-file"


@dataclass(frozen=True)
class MediaProperties:
    subject_name: str | None
    episode_name: str | None
    subtitle_language_ids: tuple[str, ...]
    resolution: str
    alliance: str
    size: int | None = None  # None = unspecified
    subtitle_kind: SubtitleKind | None = None


@dataclass(frozen=True)
class Media:
    """A playable media item produced by a media source."""

    media_id: str
    media_source_id: str
    original_url: str
    download: ResourceLocation
    original_title: str
    properties: MediaProperties
    episode_range: EpisodeRange
    location: MediaSourceLocation
    kind: MediaSourceKind
    subtitles: tuple[Subtitle, ...] = ()
    published_time: int = 0


@dataclass(frozen=True)
class MediaMatch:
    """A media item together with how confidently it matched."""

    media: Media
    kind: MatchKind

    def matches(self, request: MediaFetchRequest) -> bool | None:
        return request.matches(self)


@dataclass(frozen=True)
class MediaFetchRequest:
    """A caller's search query.

    ``matches`` returns ``False`` to reject, ``True`` to accept and ``None``
    when it cannot decide. Undecided matches are kept.
    """

    subject_names: tuple[str, ...]
    episode_sort: int | None = None

    def matches(self, match: MediaMatch) -> bool | None:
        if self.episode_sort is None:
            return None
        episode_range = match.media.episode_range
        if episode_range.season_unknown:
            return None
        return episode_range.contains(self.episode_sort)


class SinglePageResults:
    """Lazily produced, single-page query result.

    Each iteration re-runs the producer, so remote calls only happen while
    somebody consumes the results.
    """

    def __init__(self, producer: Callable[[], AsyncGenerator[MediaMatch, None]]) -> None:
        self._producer = producer

    def __aiter__(self) -> AsyncIterator[MediaMatch]:
        return self._producer()

    async def to_list(self, limit: int | None = None) -> list[MediaMatch]:
        """Drain the results. A failure raises, no partial list is returned."""
        out: list[MediaMatch] = []
        async with aclosing(self._producer()) as matches:
            async for match in matches:
                out.append(match)
                if limit is not None and len(out) >= limit:
                    break
        return out


def as_subject_names(names: Sequence[str] | str) -> tuple[str, ...]:
    """Normalize a single name or a sequence of names into a tuple."""
    if isinstance(names, str):
        return (names,)
    return tuple(names)

