"""Transport Port - Interface for authenticated JSON GET requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HttpTransportPort(Protocol):
    """Async GET + JSON decoding.

    Implementations raise on network errors, HTTP error statuses and
    undecodable bodies. Nothing is retried.
    """

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET *url* and return the decoded JSON body."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        ...
