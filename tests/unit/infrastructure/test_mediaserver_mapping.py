"""Tests for Jellyfin/Emby JSON -> entity mapping."""

from __future__ import annotations

import pytest

from jellyarr.domain.entities.catalog import ItemType
from jellyarr.domain.sources.exceptions import CatalogResponseError
from jellyarr.infrastructure.mediaserver.mapping import (
    parse_item,
    parse_playback_info,
    parse_search_response,
)

_EPISODE = {
    "Name": "Naruto",
    "SeasonName": "Season 1",
    "Id": "E1",
    "IndexNumber": 1,
    "Type": "Episode",
    "CanDownload": True,
    "MediaStreams": [
        {"Codec": "h264", "Index": 0, "Type": "Video", "IsExternal": False,
         "IsTextSubtitleStream": False},
        {"Codec": "ass", "Index": 2, "Type": "Subtitle", "IsExternal": True,
         "IsTextSubtitleStream": True, "Title": "Chinese", "Language": "chi"},
    ],
}


class TestParseItem:
    def test_full_episode(self) -> None:
        item = parse_item(_EPISODE)
        assert item.id == "E1"
        assert item.name == "Naruto"
        assert item.season_name == "Season 1"
        assert item.index_number == 1
        assert item.type is ItemType.EPISODE
        assert item.raw_type == "Episode"
        assert item.can_download is True
        assert len(item.media_streams) == 2
        sub = item.media_streams[1]
        assert sub.codec == "ass"
        assert sub.index == 2
        assert sub.title == "Chinese"
        assert sub.language == "chi"

    def test_defaults(self) -> None:
        item = parse_item({"Name": "Naruto", "Id": "S1", "Type": "Series"})
        assert item.can_download is False
        assert item.index_number is None
        assert item.season_name is None
        assert item.media_streams == ()

    def test_unknown_type_kept_raw(self) -> None:
        item = parse_item({"Name": "Box", "Id": "B1", "Type": "BoxSet"})
        assert item.type is ItemType.OTHER
        assert item.raw_type == "BoxSet"

    @pytest.mark.parametrize("missing", ["Name", "Id", "Type"])
    def test_missing_required_field_raises(self, missing: str) -> None:
        data = {"Name": "Naruto", "Id": "S1", "Type": "Series"}
        del data[missing]
        with pytest.raises(CatalogResponseError, match=missing):
            parse_item(data)

    def test_non_object_raises(self) -> None:
        with pytest.raises(CatalogResponseError):
            parse_item(["not", "an", "object"])

    def test_bad_index_number_raises(self) -> None:
        with pytest.raises(CatalogResponseError):
            parse_item({"Name": "x", "Id": "E1", "Type": "Episode", "IndexNumber": "one"})


class TestParseSearchResponse:
    def test_items_in_order(self) -> None:
        data = {"Items": [{"Name": "A", "Id": "1", "Type": "Series"},
                          {"Name": "B", "Id": "2", "Type": "Series"}],
                "TotalRecordCount": 2}
        assert [i.id for i in parse_search_response(data)] == ["1", "2"]

    def test_missing_items_means_empty(self) -> None:
        assert parse_search_response({}) == []

    def test_items_not_a_list_raises(self) -> None:
        with pytest.raises(CatalogResponseError):
            parse_search_response({"Items": {"Name": "A"}})

    def test_top_level_not_object_raises(self) -> None:
        with pytest.raises(CatalogResponseError):
            parse_search_response([])


class TestParsePlaybackInfo:
    def test_sources(self) -> None:
        data = {"MediaSources": [
            {"Id": "ms1", "Name": "Naruto 1080p [CHS]", "Path": "/media/naruto/01.mkv"},
        ], "PlaySessionId": "abc"}
        sources = parse_playback_info(data)
        assert len(sources) == 1
        assert sources[0].name == "Naruto 1080p [CHS]"
        assert sources[0].path == "/media/naruto/01.mkv"

    def test_empty_sources(self) -> None:
        assert parse_playback_info({"MediaSources": []}) == []

    def test_missing_sources_raises(self) -> None:
        with pytest.raises(CatalogResponseError):
            parse_playback_info({})

    def test_source_without_path_raises(self) -> None:
        with pytest.raises(CatalogResponseError, match="Path"):
            parse_playback_info({"MediaSources": [{"Id": "ms1", "Name": "x"}]})
