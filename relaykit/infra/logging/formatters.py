"""JSON Lines formatter with trace correlation."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord has; anything else came from extra= or the context filter
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

DEFAULT_KEYS = {"level": "levelname", "logger": "name", "message": "message"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Output carries the mapped record attributes, a UTC timestamp with
    millisecond precision, ``trace_id``/``span_id`` when an OpenTelemetry
    span is active, static fields, and every extra attribute (kinds, cursor
    arguments, client mutation ids, bound log context).

    Example output:
        ```json
        {"level": "DEBUG", "logger": "relaykit.core.pagination.engine", "message": "Ignoring malformed cursor", "timestamp": "2025-01-01T00:00:00.123Z", "argument": "after"}
        ```
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            fmt_keys: Output key -> LogRecord attribute (defaults to level, logger, message)
            static: Fields added to every record, e.g. ``{"service": "relaykit"}``
        """
        super().__init__()
        self.fmt_keys = fmt_keys or dict(DEFAULT_KEYS)
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        data: dict[str, Any] = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        data["timestamp"] = self._timestamp(record)
        data.update(self._trace_ids())

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info).replace("\n", "\\n")
        if record.stack_info:
            data["stack_trace"] = record.stack_info.replace("\n", "\\n")

        data.update(self.static)
        data.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in data
        )
        return json.dumps(data, ensure_ascii=False, default=str)

    @staticmethod
    def _timestamp(record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def _trace_ids() -> dict[str, str]:
        span_context = trace.get_current_span().get_span_context()
        if not span_context.is_valid:
            return {}
        return {
            "trace_id": format(span_context.trace_id, "032x"),
            "span_id": format(span_context.span_id, "016x"),
        }


__all__ = ["JSONFormatter"]
