"""Pydantic Settings v2 configuration.

Each concern has its own frozen settings model and an LRU-cached loader:

    from relaykit.core.settings import get_relay_settings

    settings = get_relay_settings()
    print(settings.cursor_prefix)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .loader import clear_all_caches, get_logging_settings, get_relay_settings
from .logs import LoggingSettings
from .relay import RelaySettings

__all__ = [
    "LoggingSettings",
    "RelaySettings",
    "clear_all_caches",
    "get_logging_settings",
    "get_relay_settings",
]
