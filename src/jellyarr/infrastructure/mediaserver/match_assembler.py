"""Turn episode/movie catalog items into ``MediaMatch`` records."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from jellyarr.domain.entities.catalog import CatalogItem, ItemType, MediaStreamInfo
from jellyarr.domain.entities.media import (
    EpisodeRange,
    MatchKind,
    Media,
    MediaMatch,
    MediaProperties,
    MediaSourceKind,
    MediaSourceLocation,
    ResourceLocation,
    Subtitle,
    SubtitleKind,
)

from .api import MediaBrowserApi
from .name_parser import parse_media_source_name

log = structlog.get_logger(__name__)

DEFAULT_RESOLUTION = "1080P"
DEFAULT_LANGUAGES: tuple[str, ...] = ("CHS",)

_SUBTITLE_MIME_TYPES: dict[str, str] = {
    "ass": "text/x-ass",
}
_DEFAULT_MIME_TYPE = "application/octet-stream"


def subtitle_uri(base_url: str, item_id: str, index: int, codec: str) -> str:
    return f"{base_url}/Videos/{item_id}/{item_id}/Subtitles/{index}/0/Stream.{codec}"


def subtitle_mime_type(codec: str) -> str:
    return _SUBTITLE_MIME_TYPES.get(codec.lower(), _DEFAULT_MIME_TYPE)


def build_subtitles(
    base_url: str, item_id: str, streams: Sequence[MediaStreamInfo]
) -> tuple[Subtitle, ...]:
    """External text subtitles of an item, in stream order."""
    return tuple(
        Subtitle(
            uri=subtitle_uri(base_url, item_id, stream.index, stream.codec),
            language=stream.language,
            mime_type=subtitle_mime_type(stream.codec),
            label=stream.title,
        )
        for stream in streams
        if stream.is_external_text_subtitle
    )


def title_and_range(item: CatalogItem) -> tuple[str, EpisodeRange] | None:
    """Derive the display title and episode range, or None to drop the item."""
    if item.type is ItemType.EPISODE:
        if item.index_number is None:
            return None
        return f"{item.index_number} {item.name}", EpisodeRange.single(item.index_number)
    if item.type is ItemType.MOVIE:
        return item.name, EpisodeRange.unknown_season()
    return None


class MatchAssembler:
    """Enrich catalog items with playback info and build matches.

    Playback info is fetched for every item on every call; it is not part
    of the hierarchy cache.
    """

    def __init__(
        self,
        *,
        api: MediaBrowserApi,
        media_source_id: str,
        download_uri: Callable[[str], str],
    ) -> None:
        self._api = api
        self._media_source_id = media_source_id
        self._download_uri = download_uri

    async def assemble(self, item: CatalogItem) -> MediaMatch | None:
        """Build a match for *item*, ``None`` when it cannot be represented."""
        sources = await self._api.playback_info(item.id)
        source = sources[0] if sources else None
        parsed = parse_media_source_name(source.name if source is not None else "")

        derived = title_and_range(item)
        if derived is None:
            log.debug(
                "match_assembler_item_dropped",
                item_id=item.id,
                type=item.raw_type,
                index_number=item.index_number,
            )
            return None
        original_title, episode_range = derived

        base_url = self._api.base_url
        media = Media(
            media_id=item.id,
            media_source_id=self._media_source_id,
            original_url=f"{base_url}/Items/{item.id}",
            download=ResourceLocation(
                uri=source.path if source is not None else self._download_uri(item.id),
            ),
            original_title=original_title,
            published_time=0,
            properties=MediaProperties(
                subject_name=item.season_name,
                episode_name=item.name,
                subtitle_language_ids=parsed.languages or DEFAULT_LANGUAGES,
                resolution=parsed.resolution or DEFAULT_RESOLUTION,
                alliance=self._media_source_id,
                size=None,
                subtitle_kind=SubtitleKind.EXTERNAL_PROVIDED,
            ),
            subtitles=build_subtitles(base_url, item.id, item.media_streams),
            episode_range=episode_range,
            location=MediaSourceLocation.LAN,
            kind=MediaSourceKind.WEB,
        )
        return MediaMatch(media=media, kind=MatchKind.FUZZY)
