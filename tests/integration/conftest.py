"""Shared fixtures for integration tests.

These tests use the real config loader, transport and media source with
mocked HTTP via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx
import yaml


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a complete YAML config and return its path."""
    config = {
        "app_name": "jellyarr-test",
        "environment": "test",
        "mediaserver": {
            "flavour": "jellyfin",
            "base_url": "http://yaml.local:8096/",
            "user_id": "yaml-user",
            "api_key": "yaml-key",
        },
        "http": {
            "timeout_seconds": 5.0,
            "user_agent": "TestAgent/1.0",
        },
        "logging": {"level": "DEBUG", "format": "console"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path
