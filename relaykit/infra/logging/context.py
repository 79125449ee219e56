"""Request-scoped fields for log records.

Resolvers run inside one GraphQL request, often across several awaits.
Fields bound here (request id, operation name, mutation name, ...) are
stored in a ContextVar, so every record logged while the request runs
carries them, including records from concurrently running tasks, each
with their own values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("relaykit_log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Bind fields for the rest of the current task.

    Example:
        ```python
        set_log_context(request_id="abc-123", operation="UserProfile")
        logger.info("Resolving node")  # carries request_id and operation
        ```
    """
    _log_context.set({**_log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    """Return a copy of the fields bound in the current task."""
    return dict(_log_context.get())


def clear_log_context() -> None:
    """Drop every bound field."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Unbind the given fields; unknown keys are ignored."""
    _log_context.set({k: v for k, v in _log_context.get().items() if k not in keys})


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind fields for the duration of a block, restoring the previous ones.

    Example:
        ```python
        with log_context(mutation="IntroduceShip"):
            logger.debug("Executing mutation")
        ```
    """
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextInjectingFilter(logging.Filter):
    """Copy the bound fields onto each record.

    Attached to the root logger and its queue handler. Attributes the
    record already has (explicit ``extra=`` values) win.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "log_context",
    "remove_from_log_context",
    "set_log_context",
]
