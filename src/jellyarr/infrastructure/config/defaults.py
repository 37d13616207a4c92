"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "jellyarr",
    "environment": "dev",
    "mediaserver": {
        "flavour": "emby",
        "base_url": "http://localhost:8096",
        "user_id": "",
        "api_key": "",
    },
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "Jellyarr/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
