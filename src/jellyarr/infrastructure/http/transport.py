"""httpx transport: authenticated GET requests with JSON decoding."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "Jellyarr/0.1.0"
DEFAULT_CLIENT_TIMEOUT = 15.0


class HttpxTransport:
    """Async JSON GET over ``httpx.AsyncClient``.

    Implements ``HttpTransportPort`` from domain.ports.transport.

    Errors are logged and re-raised unchanged:
    - ``httpx.HTTPStatusError`` for 4xx/5xx responses
    - ``httpx.HTTPError`` subclasses for network failures
    - ``ValueError`` (``json.JSONDecodeError``) for non-JSON bodies
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_CLIENT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        t0 = time.monotonic()
        try:
            resp = await self._http.get(url, params=params, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "transport_http_error",
                url=url,
                status=exc.response.status_code,
            )
            raise
        except httpx.HTTPError as exc:
            log.warning("transport_network_error", url=url, error=str(exc))
            raise

        try:
            data = resp.json()
        except ValueError:
            log.warning("transport_invalid_json", url=str(resp.url))
            raise

        log.debug(
            "transport_get_ok",
            url=url,
            status=resp.status_code,
            duration_ms=round((time.monotonic() - t0) * 1000, 1),
        )
        return data

    async def aclose(self) -> None:
        """Close the httpx client if this transport created it."""
        if self._owns_client:
            await self._http.aclose()
