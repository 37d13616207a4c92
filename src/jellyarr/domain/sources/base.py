"""Domain protocols for media sources."""

from __future__ import annotations

from typing import Protocol

from jellyarr.domain.entities.media import (
    ConnectionStatus,
    MediaFetchRequest,
    MediaSourceInfo,
    MediaSourceKind,
    SinglePageResults,
)


class MediaSourceProtocol(Protocol):
    """
    Protocol for a searchable media source.

    A media source:
    - has a stable ``media_source_id`` and display ``info``
    - validates its endpoint/credentials via ``check_connection()``
    - resolves a ``MediaFetchRequest`` into lazily produced matches
    """

    media_source_id: str
    kind: MediaSourceKind
    info: MediaSourceInfo

    async def check_connection(self) -> ConnectionStatus: ...

    async def fetch(self, query: MediaFetchRequest) -> SinglePageResults: ...
