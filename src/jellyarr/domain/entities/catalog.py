"""Catalog entities as returned by a Jellyfin/Emby server.

Pure value objects: no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemType(str, Enum):
    """Item kinds the search pipeline cares about."""

    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"
    MOVIE = "Movie"
    OTHER = "Other"

    @classmethod
    def from_raw(cls, raw: str) -> ItemType:
        """Map a server ``Type`` string, unknown values become ``OTHER``."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class MediaStreamInfo:
    """One stream (video, audio, subtitle) of a catalog item."""

    type: str  # "Video", "Audio", "Subtitle"
    codec: str
    index: int
    is_external: bool
    is_text_subtitle_stream: bool
    title: str | None = None
    language: str | None = None

    @property
    def is_external_text_subtitle(self) -> bool:
        return (
            self.type == "Subtitle"
            and self.is_text_subtitle_stream
            and self.is_external
        )


@dataclass(frozen=True)
class CatalogItem:
    """A series, season, episode or movie record."""

    id: str
    name: str
    type: ItemType
    raw_type: str = ""
    season_name: str | None = None
    index_number: int | None = None  # episode number within its season
    can_download: bool = False
    media_streams: tuple[MediaStreamInfo, ...] = field(default_factory=tuple)

    def name_contains(self, subject_name: str) -> bool:
        """Case-insensitive substring match against the display name."""
        return subject_name.lower() in self.name.lower()

    @property
    def is_downloadable_episode(self) -> bool:
        return self.type is ItemType.EPISODE and self.can_download


@dataclass(frozen=True)
class PlaybackSource:
    """First-class playback entry of ``/Items/{id}/PlaybackInfo``."""

    id: str
    name: str
    path: str
