"""Pytest configuration and shared fixtures.

Settings are cached per process; every test starts from a clean cache and
a clean logging context so environment overrides stay local to one test.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from relaykit.core.settings import clear_all_caches
from relaykit.infra.logging import clear_log_context


@pytest.fixture(autouse=True)
def _reset_settings_and_log_context() -> Iterator[None]:
    clear_all_caches()
    clear_log_context()
    yield
    clear_all_caches()
    clear_log_context()


@pytest.fixture
def letters() -> list[str]:
    """The five-item sequence used throughout the pagination scenarios."""
    return ["a", "b", "c", "d", "e"]
