"""Logging infrastructure.

Structured logging built on the standard library:
- JSONL format for log aggregation
- Automatic context injection via contextvars
- QueueHandler + QueueListener for non-blocking I/O

Basic usage:
    from relaykit.infra.logging import set_log_context, setup_logging
    import logging

    setup_logging()
    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Resolving node")  # Includes request_id
"""

from relaykit.infra.logging.config import configure_logging, setup_logging, shutdown
from relaykit.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    log_context,
    remove_from_log_context,
    set_log_context,
)
from relaykit.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
