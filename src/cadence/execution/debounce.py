"""Debounce — trailing-edge rate limiting that restarts on every call.

Manifesto:
    Bursty callers (keystrokes, file-system events, webhook storms) want one
    reaction per quiet period, with the latest input. A debounced wrapper
    keeps exactly one pending timer and replaces it on every call.

ARCHITECTURE
────────────
::

    w(*args)  ─ cancel pending handle ─▶ scheduler.call_later(wait, fire, args)
                                                  │  (no further calls for `wait`)
                                                  ▼
                                           fn(*args)   # return value discarded

    Debounced state (per instance, under one Lock):
      _pending : TimerHandle | None

Example::

    save = debounce(write_draft, 0.3)
    save("a"); save("ab"); save("abc")
    # ... 0.3s later: write_draft("abc") runs once

Guardrails:
    - ``wait = 0`` still defers through the scheduler
    - Exceptions from ``fn`` surface in the deferred context, never at the
      call site (fire-and-forget)

Tags:
    cadence, execution, debounce, rate-limit

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


class Debounced:
    """Callable wrapper delaying ``fn`` until calls stop for ``wait`` seconds."""

    def __init__(
        self,
        fn: Callable[..., Any],
        wait: float,
        *,
        scheduler: Scheduler | None = None,
    ):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._wait = require_non_negative("wait", wait)
        self._scheduler = scheduler or get_default_scheduler()
        self._pending: TimerHandle | None = None
        self._token: object | None = None
        self._lock = threading.Lock()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        token = object()
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._token = token
            self._pending = self._scheduler.call_later(self._wait, self._fire, token, args, kwargs)
        logger.debug("debounce_scheduled", fn=name_of(self._fn), wait=self._wait)

    def _fire(self, token: object, args: tuple, kwargs: dict[str, Any]) -> None:
        with self._lock:
            # superseded timers that slipped past cancel() must not run
            if token is not self._token:
                return
            self._pending = None
            self._token = None
        run_callable(self._fn, args, kwargs)

    def __repr__(self) -> str:
        return f"Debounced({self._fn!r}, wait={self._wait})"


def debounce(
    fn: Callable[..., Any] | None = None,
    wait: float = 0.0,
    *,
    scheduler: Scheduler | None = None,
) -> Any:
    """Debounce ``fn`` by ``wait`` seconds.

    Usable directly or as a decorator factory::

        debounced = debounce(handler, 0.25)

        @debounce(wait=0.25)
        def handler(event): ...

    Args:
        fn: Callable to debounce (omit to get a decorator)
        wait: Quiet period in seconds before ``fn`` runs
        scheduler: Timer substrate (default: the process-wide scheduler)

    Returns:
        A :class:`Debounced` wrapper, or a decorator producing one.
    """
    if fn is None:
        return lambda func: Debounced(func, wait, scheduler=scheduler)
    return Debounced(fn, wait, scheduler=scheduler)


__all__ = ["Debounced", "debounce"]
