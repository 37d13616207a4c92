from .base import MediaSourceProtocol
from .exceptions import (
    CatalogResponseError,
    MediaSourceConfigError,
    MediaSourceError,
    MediaSourceNotFoundError,
)

__all__ = [
    "CatalogResponseError",
    "MediaSourceConfigError",
    "MediaSourceError",
    "MediaSourceNotFoundError",
    "MediaSourceProtocol",
]
