"""Media source exceptions."""

from __future__ import annotations


class MediaSourceError(Exception):
    """Base class for all media-source errors."""


class MediaSourceConfigError(MediaSourceError):
    """Raised when a media source is created with unusable configuration."""


class MediaSourceNotFoundError(MediaSourceError):
    """Raised when a factory id is not known."""


class CatalogResponseError(MediaSourceError):
    """Raised when a server response does not have the expected shape."""
