"""Media-source name parser: resolution and language tags from a label."""

from __future__ import annotations

import re
from dataclasses import dataclass

_RESOLUTION_RE = re.compile(r"\d{3,4}[PpKk]")
_LANGUAGE_RE = re.compile(r"\[([A-Z]{2,3})\]")


@dataclass(frozen=True)
class ParsedSourceName:
    """Result of ``parse_media_source_name``."""

    resolution: str | None = None
    languages: tuple[str, ...] = ()


def parse_resolution(name: str) -> str | None:
    """Return the first ``1080p``/``4k``-style token upper-cased, or None."""
    match = _RESOLUTION_RE.search(name)
    if match is None:
        return None
    return match.group(0).upper()


def parse_languages(name: str) -> tuple[str, ...]:
    """Return every ``[CHS]``-style tag in order of appearance."""
    return tuple(_LANGUAGE_RE.findall(name))


def parse_media_source_name(name: str) -> ParsedSourceName:
    """Parse a playback source's display name (e.g. ``"1080p [CHS][JPN]"``).

    Total over all strings: missing information yields ``None`` / ``()``.
    """
    return ParsedSourceName(
        resolution=parse_resolution(name),
        languages=parse_languages(name),
    )
