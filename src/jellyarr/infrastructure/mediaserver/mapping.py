"""Map Jellyfin/Emby JSON payloads (PascalCase) to domain entities."""

from __future__ import annotations

from typing import Any

from jellyarr.domain.entities.catalog import (
    CatalogItem,
    ItemType,
    MediaStreamInfo,
    PlaybackSource,
)
from jellyarr.domain.sources.exceptions import CatalogResponseError


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    value = data.get(key)
    if value is None:
        raise CatalogResponseError(f"{context}: missing required field {key!r}")
    return value


def _as_dict(data: Any, context: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise CatalogResponseError(
            f"{context}: expected JSON object, got {type(data).__name__}"
        )
    return data


def _as_list(data: Any, context: str) -> list[Any]:
    if not isinstance(data, list):
        raise CatalogResponseError(
            f"{context}: expected JSON array, got {type(data).__name__}"
        )
    return data


def _optional_int(value: Any, context: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogResponseError(f"{context}: not an integer: {value!r}") from exc


def parse_media_stream(data: Any) -> MediaStreamInfo:
    obj = _as_dict(data, "MediaStream")
    index = _optional_int(_require(obj, "Index", "MediaStream"), "MediaStream.Index")
    return MediaStreamInfo(
        type=str(_require(obj, "Type", "MediaStream")),
        codec=str(obj.get("Codec") or ""),
        index=index if index is not None else 0,
        is_external=bool(obj.get("IsExternal", False)),
        is_text_subtitle_stream=bool(obj.get("IsTextSubtitleStream", False)),
        title=obj.get("Title"),
        language=obj.get("Language"),
    )


def parse_item(data: Any) -> CatalogItem:
    obj = _as_dict(data, "Item")
    raw_type = str(_require(obj, "Type", "Item"))
    streams = _as_list(obj.get("MediaStreams") or [], "Item.MediaStreams")
    return CatalogItem(
        id=str(_require(obj, "Id", "Item")),
        name=str(_require(obj, "Name", "Item")),
        type=ItemType.from_raw(raw_type),
        raw_type=raw_type,
        season_name=obj.get("SeasonName"),
        index_number=_optional_int(obj.get("IndexNumber"), "Item.IndexNumber"),
        can_download=bool(obj.get("CanDownload", False)),
        media_streams=tuple(parse_media_stream(s) for s in streams),
    )


def parse_search_response(data: Any) -> list[CatalogItem]:
    """Parse an ``/Items`` response. A missing ``Items`` key means no items."""
    obj = _as_dict(data, "SearchResponse")
    items = _as_list(obj.get("Items") or [], "SearchResponse.Items")
    return [parse_item(item) for item in items]


def parse_playback_source(data: Any) -> PlaybackSource:
    obj = _as_dict(data, "MediaSource")
    return PlaybackSource(
        id=str(_require(obj, "Id", "MediaSource")),
        name=str(_require(obj, "Name", "MediaSource")),
        path=str(_require(obj, "Path", "MediaSource")),
    )


def parse_playback_info(data: Any) -> list[PlaybackSource]:
    """Parse an ``/Items/{id}/PlaybackInfo`` response."""
    obj = _as_dict(data, "PlaybackInfoResponse")
    sources = _as_list(
        _require(obj, "MediaSources", "PlaybackInfoResponse"),
        "PlaybackInfoResponse.MediaSources",
    )
    return [parse_playback_source(s) for s in sources]
