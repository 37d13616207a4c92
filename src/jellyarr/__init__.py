"""Read-only Jellyfin/Emby catalog search adapter."""

__version__ = "0.1.0"
