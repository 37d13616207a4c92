"""Media source factories: declared parameters and instance creation."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from jellyarr.domain.entities.media import MediaSourceInfo
from jellyarr.domain.ports.lifecycle import ShutdownHooksPort
from jellyarr.domain.ports.transport import HttpTransportPort
from jellyarr.domain.sources.exceptions import MediaSourceNotFoundError
from jellyarr.infrastructure.config.schema import MediaServerConfig

from .source import BaseJellyfinMediaSource, EmbyMediaSource, JellyfinMediaSource

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SourceParameter:
    """A configuration value a factory asks its user for."""

    name: str
    description: str
    default: str | None = None


@dataclass(frozen=True)
class MediaSourceFactory:
    """Creates media sources of one server flavour."""

    factory_id: str
    source_class: type[BaseJellyfinMediaSource]
    parameters: tuple[SourceParameter, ...] = field(default_factory=tuple)
    allow_multiple_instances: bool = True

    @property
    def info(self) -> MediaSourceInfo:
        return self.source_class.INFO

    def create(
        self,
        config: MediaServerConfig,
        transport: HttpTransportPort,
        *,
        shutdown_hooks: ShutdownHooksPort | None = None,
    ) -> BaseJellyfinMediaSource:
        source = self.source_class(config, transport, shutdown_hooks=shutdown_hooks)
        log.info(
            "media_source_created",
            factory_id=self.factory_id,
            base_url=source.base_url,
        )
        return source


def _server_parameters(server: str, user_hint: str, key_hint: str) -> tuple[SourceParameter, ...]:
    return (
        SourceParameter(
            name="baseUrl",
            description="Server address, e.g. http://localhost:8096",
            default="http://localhost:8096",
        ),
        SourceParameter(
            name="userId",
            description=(
                f"User ID. Pick a user under {server} {user_hint} and copy the "
                'value after "userId=" from the address bar, '
                "e.g. cc91f58d951648829c90115520f6adec"
            ),
        ),
        SourceParameter(
            name="apikey",
            description=f"API key, created under {server} {key_hint}, "
            "e.g. b7292a71d51a6bf3a31036086a6d2e23",
        ),
    )


FACTORIES: dict[str, MediaSourceFactory] = {
    EmbyMediaSource.ID: MediaSourceFactory(
        factory_id=EmbyMediaSource.ID,
        source_class=EmbyMediaSource,
        parameters=_server_parameters("Emby", '"Dashboard - Users"', '"Dashboard - API Keys"'),
    ),
    JellyfinMediaSource.ID: MediaSourceFactory(
        factory_id=JellyfinMediaSource.ID,
        source_class=JellyfinMediaSource,
        parameters=_server_parameters(
            "Jellyfin", '"Dashboard - Users"', '"Dashboard - API Keys"'
        ),
    ),
}


def get_factory(factory_id: str) -> MediaSourceFactory:
    try:
        return FACTORIES[factory_id]
    except KeyError:
        raise MediaSourceNotFoundError(
            f"Unknown media source {factory_id!r}, known: {sorted(FACTORIES)}"
        ) from None


def create_media_source(
    factory_id: str,
    config: MediaServerConfig,
    transport: HttpTransportPort,
    *,
    shutdown_hooks: ShutdownHooksPort | None = None,
) -> BaseJellyfinMediaSource:
    """Look up *factory_id* and create a source from *config*."""
    return get_factory(factory_id).create(
        config, transport, shutdown_hooks=shutdown_hooks
    )
