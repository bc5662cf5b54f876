"""Once — run a callable a single time and replay its result forever after."""

from __future__ import annotations

import asyncio
import functools
import inspect
import threading
from collections.abc import Callable
from typing import Any

from cadence.core.clock import await_shared


class Once:
    """Callable wrapper executing ``fn`` at most once per instance.

    The first call marks the wrapper as spent *before* invoking ``fn``. If
    that call raises, the error reaches its caller and every later call
    returns ``None`` without retrying.

    Coroutine functions are started as a task by the first call (which needs
    a running event loop), not by the first await; every caller awaits that
    same task, so its result (or error) is shared. Cancelling one caller does
    not cancel the task.

    Example:
        >>> init = Once(lambda: object())
        >>> init() is init() is init()
        True
    """

    def __init__(self, fn: Callable[..., Any]):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._is_async = inspect.iscoroutinefunction(fn)
        self._has_run = False
        self._result: Any = None
        self._lock = threading.RLock()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            if not self._has_run and self._is_async:
                loop = asyncio.get_running_loop()
                self._has_run = True
                self._result = loop.create_task(self._fn(*args, **kwargs))
            elif not self._has_run:
                self._has_run = True
                self._result = self._fn(*args, **kwargs)
            if self._is_async:
                return await_shared(self._result)
            return self._result

    def __repr__(self) -> str:
        return f"Once({self._fn!r})"


def once(fn: Callable[..., Any]) -> Once:
    """Wrap ``fn`` so its body runs on the first call only.

    Works as a plain call or a decorator::

        connect = once(open_connection)

        @once
        def load_config(): ...
    """
    return Once(fn)


__all__ = ["Once", "once"]
