"""Logging configuration settings."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Logging of the relay layer and the service embedding it.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=debug, LOG_JSON_LOGS=false, LOG_LOG_FILE=logs/relay.jsonl

    DEBUG shows degraded paths (ignored cursors, undecodable ids, unknown
    kinds); configuration errors are logged at ERROR and above.
    """

    # ──────────────────────────────────────────────────────────────
    # Output format
    # ──────────────────────────────────────────────────────────────

    service_name: str = Field(
        default="relaykit",
        description="Static service field of JSON records",
    )
    level: LogLevel = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Emit JSON Lines instead of plain text")
    include_context: bool = Field(
        default=True,
        description="Copy fields bound with set_log_context onto every record",
    )

    # ──────────────────────────────────────────────────────────────
    # Destinations
    # ──────────────────────────────────────────────────────────────

    console_enabled: bool = Field(default=True, description="Write records to stderr")
    log_file: str | None = Field(
        default=None,
        max_length=500,
        description="Rotating log file path; unset disables file output",
    )
    max_bytes: int = Field(
        default=10_485_760,
        ge=1024,
        le=1_073_741_824,
        description="Rotate the log file at this size (bytes)",
    )
    backup_count: int = Field(default=5, ge=0, le=100, description="Rotated files kept")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def level_int(self) -> int:
        """Numeric value of ``level``."""
        return logging.getLevelName(self.level)

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for configure_logging(...)."""
        return {
            "log_level": self.level,
            "json_logs": self.json_logs,
            "file_path": self.log_file,
            "file_max_bytes": self.max_bytes,
            "file_backup_count": self.backup_count,
            "console_enabled": self.console_enabled,
            "include_context": self.include_context,
            "service_name": self.service_name,
        }
