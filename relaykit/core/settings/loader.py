"""Cached settings loaders.

Environment and ``.env`` files are read once per process; every later call
returns the same frozen instance. Engine functions accept an explicit
``settings=`` argument, so per-schema overrides never touch the cache.

Testing:
    clear_all_caches()  # pick up monkeypatched RELAY_*/LOG_* variables
"""

from __future__ import annotations

from functools import lru_cache

from .logs import LoggingSettings
from .relay import RelaySettings


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Get cached Relay convention settings."""
    return RelaySettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


def clear_all_caches() -> None:
    """Forget every cached settings instance."""
    get_relay_settings.cache_clear()
    get_logging_settings.cache_clear()
