"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
ServerFlavour = Literal["emby", "jellyfin"]


class MediaServerConfig(BaseModel):
    """Connection settings of one Jellyfin/Emby server (YAML: mediaserver.*)."""

    flavour: ServerFlavour = Field(
        default="emby",
        description="Server flavour; selects the media source factory.",
    )
    base_url: str = Field(
        default="http://localhost:8096",
        description="Server address, e.g. http://localhost:8096",
    )
    user_id: str = Field(
        default="",
        description="User id the catalog is browsed as.",
    )
    api_key: str = Field(
        default="",
        description="API key created in the server dashboard.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("user_id", "api_key")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class AppConfig(BaseModel):
    """Validated application configuration (single source of truth)."""

    # General
    app_name: str = Field(default="jellyarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Media server (YAML section: mediaserver.*)
    mediaserver: MediaServerConfig = Field(default_factory=MediaServerConfig)

    # HTTP transport (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for server requests.",
    )
    http_user_agent: str = Field(
        default="Jellyarr/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        The API key is masked.
        """
        mediaserver = self.mediaserver.model_dump()
        if mediaserver["api_key"]:
            mediaserver["api_key"] = "***"
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "mediaserver": mediaserver,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read JELLYARR_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - JELLYARR_BASE_URL
    - JELLYARR_API_KEY
    - JELLYARR_USER_ID
    - JELLYARR_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="JELLYARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    flavour: Optional[ServerFlavour] = None
    base_url: Optional[str] = None
    user_id: Optional[str] = None
    api_key: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
