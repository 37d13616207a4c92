"""HTTP transport adapters."""

from __future__ import annotations

from .transport import DEFAULT_USER_AGENT, HttpxTransport

__all__ = ["DEFAULT_USER_AGENT", "HttpxTransport"]
