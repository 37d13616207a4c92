"""Jellyfin/Emby media source adapter."""

from __future__ import annotations

from .factory import FACTORIES, MediaSourceFactory, create_media_source, get_factory
from .source import BaseJellyfinMediaSource, EmbyMediaSource, JellyfinMediaSource

__all__ = [
    "FACTORIES",
    "BaseJellyfinMediaSource",
    "EmbyMediaSource",
    "JellyfinMediaSource",
    "MediaSourceFactory",
    "create_media_source",
    "get_factory",
]
