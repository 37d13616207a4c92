"""Composition root: wire config -> transport -> media source -> use cases."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog

from jellyarr.application.use_cases import ConnectionCheckUseCase, MediaSearchUseCase
from jellyarr.domain.ports.transport import HttpTransportPort
from jellyarr.infrastructure.config.schema import AppConfig
from jellyarr.infrastructure.http import HttpxTransport
from jellyarr.infrastructure.lifecycle import ShutdownHooks
from jellyarr.infrastructure.mediaserver import (
    BaseJellyfinMediaSource,
    create_media_source,
)

log = structlog.get_logger(__name__)


@dataclass
class Services:
    """Everything the CLI needs for one process lifetime."""

    config: AppConfig
    transport: HttpTransportPort
    source: BaseJellyfinMediaSource
    search: MediaSearchUseCase
    connection_check: ConnectionCheckUseCase
    shutdown_hooks: ShutdownHooks


@asynccontextmanager
async def build_services(
    config: AppConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[Services]:
    """Create all services; run shutdown hooks (cache clear, client close) on exit."""
    hooks = ShutdownHooks()
    transport = HttpxTransport(
        http_client=http_client,
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
    )
    hooks.add(transport.aclose, name="transport_close")

    try:
        source = create_media_source(
            config.mediaserver.flavour,
            config.mediaserver,
            transport,
            shutdown_hooks=hooks,
        )
        services = Services(
            config=config,
            transport=transport,
            source=source,
            search=MediaSearchUseCase(source=source),
            connection_check=ConnectionCheckUseCase(source=source),
            shutdown_hooks=hooks,
        )
        log.debug(
            "services_ready",
            source=source.media_source_id,
            base_url=source.base_url,
        )
        yield services
    finally:
        await hooks.run()
