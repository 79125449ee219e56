"""Logging setup for services embedding relaykit.

Records from every logger propagate to one QueueHandler on the root
logger; a QueueListener thread drains the queue into the console and
optional rotating file handlers, so resolvers never block on log I/O.
The root level and the context filter are applied through dictConfig.
"""

from __future__ import annotations

import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from relaykit.infra.logging.context import ContextInjectingFilter
from relaykit.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from relaykit.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_queue_handler: QueueHandler | None = None
_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False


def shutdown() -> None:
    """Flush queued records and detach the handlers installed by configure_logging."""
    global _queue_handler, _listener, _LOGGING_INITIALIZED

    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None

    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None

    _LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Configure logging from LoggingSettings, once per process.

    Args:
        log_settings: Settings to apply (defaults to get_logging_settings()).
        force: Reconfigure even if logging was already set up.
        **configure_kwargs: Overrides passed to configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from relaykit.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **configure_kwargs})
    _LOGGING_INITIALIZED = True


def _build_formatter(json_logs: bool, service_name: str) -> logging.Formatter:
    if json_logs:
        return JSONFormatter(static={"service": service_name})
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _build_handlers(
    console_enabled: bool,
    path: Path | None,
    max_bytes: int,
    backup_count: int,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if console_enabled:
        handlers.append(logging.StreamHandler())
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        )
    return handlers


def configure_logging(
    log_level: str = "INFO",
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "relaykit",
) -> None:
    """Install the queue-based logging pipeline on the root logger.

    Calling it again replaces the previous pipeline.

    Args:
        log_level: Root level name, any case.
        file_path: Rotating log file; None writes no file.
        json_logs: JSON Lines when true, plain text otherwise.
        console_enabled: Also write to stderr.
        include_context: Attach ContextInjectingFilter so bound log context
            reaches every record.
        file_max_bytes: Rotation size of the log file.
        file_backup_count: Rotated files kept.
        service_name: ``service`` field of JSON records.

    Example:
        from relaykit.core.settings import get_logging_settings

        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    global _queue_handler, _listener

    shutdown()

    root = logging.getLogger()
    for existing in [f for f in root.filters if isinstance(f, ContextInjectingFilter)]:
        root.removeFilter(existing)

    filters: dict[str, Any] = {"context": {"()": ContextInjectingFilter}} if include_context else {}
    logging.config.dictConfig(
        {
            "version": 1,
            "incremental": False,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {"level": log_level.upper(), "filters": list(filters)},
        }
    )

    formatter = _build_formatter(json_logs, service_name)
    handlers = _build_handlers(
        console_enabled,
        Path(file_path) if file_path else None,
        file_max_bytes,
        file_backup_count,
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    queue: Queue[logging.LogRecord] = Queue(-1)
    _queue_handler = QueueHandler(queue)
    # Root filters only see records logged on root itself, not propagated ones
    for flt in root.filters:
        _queue_handler.addFilter(flt)
    root.addHandler(_queue_handler)

    _listener = QueueListener(queue, *handlers, respect_handler_level=True)
    _listener.start()
    logger.debug("Logging configured", extra={"json_logs": json_logs, "level": log_level})


__all__ = ["configure_logging", "setup_logging", "shutdown"]
