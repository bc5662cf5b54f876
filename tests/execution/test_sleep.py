"""Tests for sleep."""

import asyncio
import time

import pytest

from cadence.core.errors import ConfigError
from cadence.execution.sleep import sleep


class TestSleep:
    """Tests for the awaitable delay."""

    @pytest.mark.asyncio
    async def test_waits_at_least_duration(self):
        """Test elapsed time is at least the requested delay."""
        start = time.monotonic()
        await sleep(0.05)
        assert time.monotonic() - start >= 0.05

    @pytest.mark.asyncio
    async def test_zero_completes(self):
        """Test sleep(0) completes without error."""
        assert await sleep(0) is None

    @pytest.mark.asyncio
    async def test_deadline_fixed_at_creation(self):
        """Test time spent before awaiting counts against the delay."""
        pause = sleep(0.1)
        await asyncio.sleep(0.1)

        start = time.monotonic()
        await pause
        assert time.monotonic() - start < 0.09

    def test_negative_rejected(self):
        """Test negative durations raise ConfigError at call time."""
        with pytest.raises(ConfigError) as exc_info:
            sleep(-1)
        assert exc_info.value.context == {"seconds": -1}

    def test_config_error_is_value_error(self):
        """Test generic ValueError handlers still catch it."""
        with pytest.raises(ValueError):
            sleep(-0.5)

    @pytest.mark.asyncio
    async def test_zero_yields_to_loop(self):
        """Test sleep(0) lets other ready tasks run."""
        ran = []

        async def other():
            ran.append(True)

        task = asyncio.ensure_future(other())
        await sleep(0)

        assert ran == [True]
        await task

    @pytest.mark.asyncio
    async def test_elapsed_deadline_still_yields(self):
        """Test an already-passed deadline still suspends once."""
        ran = []
        pause = sleep(0.01)
        await asyncio.sleep(0.02)

        async def other():
            ran.append(True)

        task = asyncio.ensure_future(other())
        await pause

        assert ran == [True]
        await task
