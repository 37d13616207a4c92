from .catalog import CatalogItem, ItemType, MediaStreamInfo, PlaybackSource
from .media import (
    ConnectionStatus,
    EpisodeRange,
    MatchKind,
    Media,
    MediaFetchRequest,
    MediaMatch,
    MediaProperties,
    MediaSourceInfo,
    MediaSourceKind,
    MediaSourceLocation,
    ResourceLocation,
    SinglePageResults,
    Subtitle,
    SubtitleKind,
    as_subject_names,
)

__all__ = [
    "CatalogItem",
    "ConnectionStatus",
    "EpisodeRange",
    "ItemType",
    "MatchKind",
    "Media",
    "MediaFetchRequest",
    "MediaMatch",
    "MediaProperties",
    "MediaSourceInfo",
    "MediaSourceKind",
    "MediaSourceLocation",
    "MediaStreamInfo",
    "PlaybackSource",
    "ResourceLocation",
    "SinglePageResults",
    "Subtitle",
    "SubtitleKind",
    "as_subject_names",
]
