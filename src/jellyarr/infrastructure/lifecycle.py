"""Shutdown hooks: callbacks that run once when the application stops."""

from __future__ import annotations

import asyncio
import inspect

import structlog

from jellyarr.domain.ports.lifecycle import ShutdownCallback

log = structlog.get_logger(__name__)


class ShutdownHooks:
    """Collect cleanup callbacks and run them once, newest first.

    Usage::

        hooks = ShutdownHooks()
        hooks.add(source.clear_cache)
        hooks.add(transport.aclose)

        # In the CLI's finally:
        await hooks.run()

    Callbacks may be sync or async. A failing callback is logged and the
    remaining ones still run; cancellation is propagated.
    """

    def __init__(self) -> None:
        self._callbacks: list[tuple[str, ShutdownCallback]] = []
        self._ran = False

    @property
    def has_run(self) -> bool:
        return self._ran

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: ShutdownCallback, *, name: str | None = None) -> None:
        label = name or getattr(callback, "__qualname__", repr(callback))
        self._callbacks.append((label, callback))

    async def run(self) -> None:
        if self._ran:
            return
        self._ran = True
        for name, callback in reversed(self._callbacks):
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception:  # noqa: BLE001
                log.warning("shutdown_hook_failed", hook=name, exc_info=True)
            else:
                log.debug("shutdown_hook_done", hook=name)
