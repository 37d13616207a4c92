from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path
from typing import Any

import httpx
import structlog

from jellyarr.domain.entities.media import ConnectionStatus, MediaMatch
from jellyarr.domain.sources.exceptions import MediaSourceError
from jellyarr.infrastructure.config import AppConfig, load_config
from jellyarr.infrastructure.logging.setup import configure_logging, shutdown_logging
from jellyarr.interfaces.composition import build_services

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="jellyarr")

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--flavour",
        default=None,
        choices=["emby", "jellyfin"],
        help="Override server flavour.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Override server address.",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="Override user id.",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Override API key.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search the catalog by show name.")
    search.add_argument("names", nargs="+", help="Subject name(s) to search for.")
    search.add_argument(
        "--episode",
        type=int,
        default=None,
        help="Only keep matches covering this episode number.",
    )
    search.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many matches.",
    )

    sub.add_parser("check", help="Check server address and credentials.")

    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for attr in ("flavour", "base_url", "user_id", "api_key", "log_level", "log_format"):
        value = getattr(args, attr)
        if value:
            overrides[attr] = value
    return overrides


def match_to_json(match: MediaMatch) -> str:
    """One JSON line per match (enums rendered by value)."""
    data = asdict(match)
    return json.dumps(data, ensure_ascii=False, default=str)


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    async with build_services(config) as services:
        if args.command == "check":
            status = await services.connection_check.execute()
            print(status.value)
            return 0 if status is ConnectionStatus.SUCCESS else 1

        try:
            matches = await services.search.execute(
                args.names,
                episode_sort=args.episode,
                limit=args.limit,
            )
        except (httpx.HTTPError, ValueError, MediaSourceError) as exc:
            log.error("search_failed", error=str(exc))
            return 1

        for match in matches:
            print(match_to_json(match))
        return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, runs one command.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=_cli_overrides(args),
    )

    configure_logging(config, stream=sys.stderr)
    try:
        return asyncio.run(_run(args, config))
    except MediaSourceError as exc:
        log.error("media_source_unavailable", error=str(exc))
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(start())
