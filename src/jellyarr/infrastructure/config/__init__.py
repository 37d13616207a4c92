from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, MediaServerConfig

__all__ = ["AppConfig", "EnvOverrides", "MediaServerConfig", "load_config"]
