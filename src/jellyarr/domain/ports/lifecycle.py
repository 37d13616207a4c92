"""Port for application shutdown hooks."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

ShutdownCallback = Callable[[], Awaitable[None] | None]


class ShutdownHooksPort(Protocol):
    """Registration point for callbacks that run once at shutdown."""

    def add(self, callback: ShutdownCallback, *, name: str | None = None) -> None: ...

    async def run(self) -> None: ...
