"""
Shared pytest fixtures and configuration for cadence tests.

This module provides:
- A virtual clock (``manual_scheduler``) for deterministic timing tests
- Isolation of the process-wide default scheduler and cached settings

Usage:
    def test_debounce(manual_scheduler):
        debounced = debounce(fn, 0.1, scheduler=manual_scheduler)
        debounced()
        manual_scheduler.advance(0.1)
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure cadence package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cadence.core.clock import ManualScheduler, set_default_scheduler
from cadence.core.settings import get_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit speed marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    """A virtual clock starting at t=100s."""
    return ManualScheduler(start=100.0)


@pytest.fixture(autouse=True)
def _restore_default_scheduler() -> Generator[None, None, None]:
    """Undo any set_default_scheduler() done by a test."""
    previous = set_default_scheduler(None)
    set_default_scheduler(previous)
    yield
    set_default_scheduler(previous)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Re-read CADENCE_* environment variables in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
