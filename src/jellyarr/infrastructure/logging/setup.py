from __future__ import annotations

import atexit
import copy
import logging
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Optional, TextIO

import structlog

from jellyarr.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)


def _add_record_created_timestamp_utc(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Ensure timestamps for non-structlog (foreign) LogRecords match the time when the record
    was created, not the time when the background listener formats it.

    ProcessorFormatter sets event_dict["_record"] for foreign records.
    """
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = dt.isoformat().replace("+00:00", "Z")
    return event_dict


def _mask_api_key(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # httpx logs full request URLs; download URIs carry ?api_key=...
    for key, value in event_dict.items():
        if isinstance(value, str) and "api_key=" in value:
            head, _, tail = value.partition("api_key=")
            rest = tail.split("&", 1)
            masked = "***" + ("&" + rest[1] if len(rest) > 1 else "")
            event_dict[key] = f"{head}api_key={masked}"
    return event_dict


_QUEUE_LISTENER: Optional[QueueListener] = None


def _renderer(config: AppConfig) -> structlog.typing.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _stop_async_listener() -> None:
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        try:
            _QUEUE_LISTENER.stop()
        finally:
            _QUEUE_LISTENER = None


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


class _MinLevelFilter(logging.Filter):
    def __init__(self, min_level: int) -> None:
        super().__init__()
        self._min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self._min_level


class _StructlogPreservingQueueHandler(QueueHandler):
    """QueueHandler that keeps structlog event dicts (record.msg) intact."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        # QueueHandler.prepare() would normally do record.msg = record.getMessage().
        # This destroys dict-msg for structlog + ProcessorFormatter.
        return copy.copy(record)


def _enable_async_logging(config: AppConfig, stream: Optional[TextIO] = None) -> None:
    """
    Route ALL stdlib logging through a QueueHandler; emit via QueueListener in a background thread.

    DEBUG/INFO/WARNING go to stdout, ERROR/CRITICAL to stderr. With *stream*
    set, every level goes to that one stream instead. Foreign records keep
    the timestamp of their creation.
    """
    global _QUEUE_LISTENER

    _stop_async_listener()

    processor_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            _add_record_created_timestamp_utc,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _mask_api_key,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config),
        ],
    )

    handlers: list[logging.Handler]
    if stream is not None:
        single_handler = logging.StreamHandler(stream=stream)
        single_handler.setFormatter(processor_formatter)
        handlers = [single_handler]
    else:
        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.setFormatter(processor_formatter)
        stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))

        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setFormatter(processor_formatter)
        stderr_handler.addFilter(_MinLevelFilter(logging.ERROR))
        handlers = [stdout_handler, stderr_handler]

    q: queue.Queue[logging.LogRecord] = queue.Queue()  # unbounded; non-dropping

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_StructlogPreservingQueueHandler(q))
    root.setLevel(config.log_level)

    # httpx logs every request at INFO; keep it quiet unless debugging.
    if config.log_level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)

    _QUEUE_LISTENER = QueueListener(q, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()
    atexit.register(_stop_async_listener)


def configure_logging(config: AppConfig, *, stream: Optional[TextIO] = None) -> None:
    """Configure structlog + stdlib logging.

    *stream* sends all log output to one stream; the CLI passes
    ``sys.stderr`` so stdout carries only command output.

    The actual emission is wired through QueueHandler/QueueListener so
    logging never blocks the event loop.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _mask_api_key,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _enable_async_logging(config, stream)

    log.info(
        "logging_configured", log_format=config.log_format, log_level=config.log_level
    )


def shutdown_logging() -> None:
    """Flush and stop the background listener."""
    _stop_async_listener()
