"""Tests for debounce."""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from cadence.core.clock import set_default_scheduler
from cadence.core.errors import ConfigError
from cadence.execution.debounce import Debounced, debounce


class TestDebounce:
    """Tests for debounce with a virtual clock."""

    def test_delays_execution(self, manual_scheduler):
        """Test fn runs only after the wait elapses."""
        fn = MagicMock()
        debounced = debounce(fn, 0.25, scheduler=manual_scheduler)

        debounced()
        fn.assert_not_called()

        manual_scheduler.advance(0.125)
        fn.assert_not_called()

        manual_scheduler.advance(0.125)
        fn.assert_called_once_with()

    def test_passes_arguments(self, manual_scheduler):
        """Test positional and keyword arguments are forwarded."""
        fn = MagicMock()
        debounced = debounce(fn, 0.1, scheduler=manual_scheduler)

        debounced("arg1", "arg2", flag=True)
        manual_scheduler.advance(0.2)

        fn.assert_called_once_with("arg1", "arg2", flag=True)

    def test_burst_collapses_to_last_call(self, manual_scheduler):
        """Test a burst yields one call with the last arguments."""
        fn = MagicMock()
        debounced = debounce(fn, 0.25, scheduler=manual_scheduler)

        for i in range(5):
            debounced(i)
            manual_scheduler.advance(0.125)

        fn.assert_not_called()
        manual_scheduler.advance(0.125)
        fn.assert_called_once_with(4)

    def test_each_call_restarts_the_wait(self, manual_scheduler):
        """Test the call fires `wait` after the last call, not the first."""
        fired_at = []
        debounced = debounce(lambda: fired_at.append(manual_scheduler.now()), 1.0, scheduler=manual_scheduler)

        debounced()
        manual_scheduler.advance(0.5)
        debounced()
        manual_scheduler.advance(5.0)

        assert fired_at == [101.5]

    def test_superseded_timers_are_cancelled(self, manual_scheduler):
        """Test only one timer stays pending across a burst."""
        debounced = debounce(MagicMock(), 0.1, scheduler=manual_scheduler)

        debounced()
        debounced()
        debounced()

        assert manual_scheduler.pending == 1

    def test_separate_quiet_periods_fire_separately(self, manual_scheduler):
        """Test one call per quiescent period."""
        fn = MagicMock()
        debounced = debounce(fn, 0.1, scheduler=manual_scheduler)

        debounced("a")
        manual_scheduler.advance(0.2)
        debounced("b")
        manual_scheduler.advance(0.2)

        assert [c.args for c in fn.call_args_list] == [("a",), ("b",)]

    def test_zero_wait_still_defers(self, manual_scheduler):
        """Test wait=0 goes through the scheduler."""
        fn = MagicMock()
        debounced = debounce(fn, 0, scheduler=manual_scheduler)

        debounced()
        fn.assert_not_called()

        manual_scheduler.run_pending()
        fn.assert_called_once()

    def test_returns_none(self, manual_scheduler):
        """Test the wrapper discards fn's return value."""
        debounced = debounce(MagicMock(return_value="ignored"), 0.1, scheduler=manual_scheduler)
        assert debounced() is None

    def test_errors_surface_in_deferred_context(self, manual_scheduler):
        """Test fn errors are not raised at the call site."""
        debounced = debounce(MagicMock(side_effect=RuntimeError("late")), 0.1, scheduler=manual_scheduler)

        debounced()  # does not raise

        with pytest.raises(RuntimeError, match="late"):
            manual_scheduler.advance(0.1)

    def test_negative_wait_rejected(self):
        """Test invalid configuration."""
        with pytest.raises(ConfigError):
            debounce(MagicMock(), -1)

    def test_decorator_form(self, manual_scheduler):
        """Test @debounce(wait=...) usage."""
        calls = []

        @debounce(wait=0.5, scheduler=manual_scheduler)
        def save(text):
            """Persist a draft."""
            calls.append(text)

        assert isinstance(save, Debounced)
        assert save.__name__ == "save"
        assert save.__doc__ == "Persist a draft."

        save("a")
        save("ab")
        manual_scheduler.advance(0.5)
        assert calls == ["ab"]

    def test_uses_default_scheduler(self, manual_scheduler):
        """Test the process-wide scheduler is picked up at wrap time."""
        set_default_scheduler(manual_scheduler)
        fn = MagicMock()
        debounced = debounce(fn, 0.1)

        debounced()
        manual_scheduler.advance(0.1)
        fn.assert_called_once()

    def test_coroutine_function(self, manual_scheduler):
        """Test async fn is driven to completion when it fires."""
        calls = []

        async def handler(value):
            await asyncio.sleep(0)
            calls.append(value)

        debounced = debounce(handler, 0.1, scheduler=manual_scheduler)
        debounced("x")
        manual_scheduler.advance(0.1)

        assert calls == ["x"]


class TestDebounceRealTime:
    """Tests for debounce on the system scheduler."""

    def test_thread_timer_fires_once(self):
        """Test a burst outside a loop fires once via a timer thread."""
        done = threading.Event()
        calls = []

        def fn(value):
            calls.append(value)
            done.set()

        debounced = debounce(fn, 0.05)
        debounced(1)
        debounced(2)
        debounced(3)

        assert done.wait(1.0)
        assert calls == [3]

    @pytest.mark.asyncio
    async def test_event_loop_fires_once(self):
        """Test a burst inside a loop fires once on the loop."""
        fn = MagicMock()
        debounced = debounce(fn, 0.05)

        debounced("a")
        debounced("b")
        fn.assert_not_called()

        await asyncio.sleep(0.15)
        fn.assert_called_once_with("b")
