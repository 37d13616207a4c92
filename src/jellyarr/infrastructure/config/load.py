"""Layered config loading: defaults < YAML < env (incl. .env) < CLI."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS = ("mediaserver", "http", "logging")
_TOP_LEVEL = ("app_name", "environment")

# Flat keys (env vars, CLI flags) and where they live in the YAML shape.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "flavour": ("mediaserver", "flavour"),
    "base_url": ("mediaserver", "base_url"),
    "user_id": ("mediaserver", "user_id"),
    "api_key": ("mediaserver", "api_key"),
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _merge_into(base: dict[str, Any], layer: Mapping[str, Any]) -> None:
    """Merge *layer* into *base*; sections merge key by key, scalars replace."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            base[key] = value


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a flat or sectioned layer into the YAML shape."""
    out: dict[str, Any] = {k: layer[k] for k in _TOP_LEVEL if k in layer}
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)
    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Build the validated ``AppConfig``.

    A ``.env`` file only fills variables that are not already set, so real
    environment variables win over it. Nothing is written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged = _sectioned(deepcopy(DEFAULT_CONFIG))
    layers: list[Mapping[str, Any]] = []
    if config_path is not None:
        layers.append(_read_yaml(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    for layer in layers:
        _merge_into(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
