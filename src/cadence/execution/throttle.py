"""Throttle — leading-edge rate limiting with one trailing catch-up call.

Manifesto:
    Where debounce waits for silence, throttle guarantees progress: the first
    call fires immediately, later calls inside the window collapse into a
    single trailing call delivered when the window closes.

ARCHITECTURE
────────────
::

    w(*args) at time `now`
      │
      ├── never fired, or now - last_fired_at >= limit
      │       cancel trailing; fn(*args); last_fired_at = now
      │
      └── inside the window
              cancel trailing;
              call_later(limit - (now - last_fired_at), fire, args)
                                  │
                                  ▼
                          fn(*args); last_fired_at = scheduler.now()

    Throttled state (per instance, under one Lock):
      _last_fired_at : float | None
      _pending       : TimerHandle | None

    The trailing delay is computed when the call is made, so every call in
    one window targets the same deadline: last_fired_at + limit.

Example::

    report = throttle(send_progress, 1.0)
    for chunk in chunks:
        report(chunk)       # at most one send per second, last chunk always sent

Tags:
    cadence, execution, throttle, rate-limit

Doc-Types:
    api-reference
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from typing import Any

from cadence.core.clock import (
    Scheduler,
    TimerHandle,
    get_default_scheduler,
    name_of,
    run_callable,
)
from cadence.core.errors import require_non_negative
from cadence.core.logging import get_logger

logger = get_logger(__name__)


class Throttled:
    """Callable wrapper firing ``fn`` at most once per ``limit`` seconds."""

    def __init__(
        self,
        fn: Callable[..., Any],
        limit: float,
        *,
        scheduler: Scheduler | None = None,
    ):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._limit = require_non_negative("limit", limit)
        self._scheduler = scheduler or get_default_scheduler()
        self._last_fired_at: float | None = None
        self._pending: TimerHandle | None = None
        self._token: object | None = None
        self._lock = threading.Lock()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            now = self._scheduler.now()
            self._cancel_pending()

            if self._last_fired_at is None or now - self._last_fired_at >= self._limit:
                self._last_fired_at = now
                fire_now = True
            else:
                delay = self._limit - (now - self._last_fired_at)
                token = object()
                self._token = token
                self._pending = self._scheduler.call_later(delay, self._fire, token, args, kwargs)
                fire_now = False

        if fire_now:
            run_callable(self._fn, args, kwargs)
        else:
            logger.debug("throttle_trailing_scheduled", fn=name_of(self._fn), delay=delay)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._token = None

    def _fire(self, token: object, args: tuple, kwargs: dict[str, Any]) -> None:
        with self._lock:
            if token is not self._token:
                return
            self._pending = None
            self._token = None
            self._last_fired_at = self._scheduler.now()
        run_callable(self._fn, args, kwargs)

    def __repr__(self) -> str:
        return f"Throttled({self._fn!r}, limit={self._limit})"


def throttle(
    fn: Callable[..., Any] | None = None,
    limit: float = 0.0,
    *,
    scheduler: Scheduler | None = None,
) -> Any:
    """Throttle ``fn`` to at most one call per ``limit`` seconds.

    Usable directly or as a decorator factory::

        throttled = throttle(on_scroll, 0.1)

        @throttle(limit=0.1)
        def on_scroll(position): ...

    Args:
        fn: Callable to throttle (omit to get a decorator)
        limit: Window length in seconds
        scheduler: Timer substrate (default: the process-wide scheduler)

    Returns:
        A :class:`Throttled` wrapper, or a decorator producing one.
    """
    if fn is None:
        return lambda func: Throttled(func, limit, scheduler=scheduler)
    return Throttled(fn, limit, scheduler=scheduler)


__all__ = ["Throttled", "throttle"]
