"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from jellyarr.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FLAVOUR", "BASE_URL", "USER_ID", "API_KEY", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(f"JELLYARR_{name}", raising=False)


class TestDefaultsOnly:
    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "jellyarr"
        assert config.environment == "dev"
        assert config.mediaserver.flavour == "emby"
        assert config.mediaserver.base_url == "http://localhost:8096"
        assert config.mediaserver.api_key == ""
        assert config.http_timeout_seconds == 15.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"

    def test_prod_derives_json_logs(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "jellyarr-test"
        assert config.mediaserver.flavour == "jellyfin"
        assert config.mediaserver.base_url == "http://yaml.local:8096"
        assert config.mediaserver.api_key == "yaml-key"
        assert config.http_timeout_seconds == 5.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_partial_override_preserves_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({"mediaserver": {"api_key": "abc"}}), encoding="utf-8")

        config = load_config(config_path=path)
        assert config.mediaserver.api_key == "abc"
        assert config.mediaserver.base_url == "http://localhost:8096"

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_invalid_timeout_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"http": {"timeout_seconds": 0}}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_config(config_path=path)


class TestEnvOverrides:
    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JELLYARR_API_KEY", "env-key")
        monkeypatch.setenv("JELLYARR_LOG_LEVEL", "WARNING")

        config = load_config(config_path=yaml_config)
        assert config.mediaserver.api_key == "env-key"
        assert config.log_level == "WARNING"
        assert config.mediaserver.user_id == "yaml-user"

    def test_dotenv_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("JELLYARR_BASE_URL=http://dotenv.local:8096\n", encoding="utf-8")
        # Record the variable so monkeypatch removes what load_dotenv sets.
        monkeypatch.setenv("JELLYARR_BASE_URL", "unset")
        monkeypatch.delenv("JELLYARR_BASE_URL")

        config = load_config(dotenv_path=dotenv)
        assert config.mediaserver.base_url == "http://dotenv.local:8096"

    def test_dotenv_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    def test_cli_beats_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JELLYARR_API_KEY", "env-key")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"api_key": "cli-key", "flavour": "emby"},
        )
        assert config.mediaserver.api_key == "cli-key"
        assert config.mediaserver.flavour == "emby"

    def test_sectioned_cli_overrides(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"http": {"timeout_seconds": 1.5}},
        )
        assert config.http_timeout_seconds == 1.5

    def test_sectioned_dict_masks_api_key(self, yaml_config: Path) -> None:
        dumped = load_config(config_path=yaml_config).to_sectioned_dict()
        assert dumped["mediaserver"]["api_key"] == "***"
        assert dumped["http"]["timeout_seconds"] == 5.0
