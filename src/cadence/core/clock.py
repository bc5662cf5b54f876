"""
Clock and timer substrate for the timing wrappers.

Every timing wrapper in cadence (debounce, throttle) needs exactly two things
from its host: a monotonic "now" and a way to run a callback later with the
option to cancel it. This module defines that contract and ships two
implementations.

Manifesto:
    Timing code is only as testable as its clock:
    - **One seam:** Wrappers never call ``time`` or ``asyncio`` directly
    - **Real by default:** ``SystemScheduler`` works inside and outside a loop
    - **Virtual on demand:** ``ManualScheduler`` makes timing deterministic

Architecture:
    ::

        Scheduler (Protocol)
          ├── SystemScheduler   ─ time.monotonic + loop.call_later / threading.Timer
          └── ManualScheduler   ─ virtual clock, advance(seconds) runs due callbacks

        API: now() -> float                       (monotonic seconds)
             call_later(delay, cb, *args) -> TimerHandle
             TimerHandle.cancel()

Examples:
    >>> clock = ManualScheduler()
    >>> fired = []
    >>> handle = clock.call_later(1.0, fired.append, "tick")
    >>> clock.advance(0.5); fired
    []
    >>> clock.advance(0.5); fired
    ['tick']

Guardrails:
    - A zero delay still defers; nothing runs synchronously inside call_later
    - Negative delays are clamped to zero

Tags:
    clock, timer, scheduler, cadence, testing

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
import heapq
import inspect
import itertools
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol


class TimerHandle(Protocol):
    """Cancellation handle returned by :meth:`Scheduler.call_later`."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Monotonic time source plus deferred execution with cancellation."""

    def now(self) -> float:
        """Current monotonic time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Run ``callback(*args)`` no earlier than ``delay`` seconds from now."""
        ...


def name_of(fn: Any) -> str:
    """Best-effort display name for a callable, used in log events."""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


# the event loop only keeps weak references to tasks
_background_tasks: set[asyncio.Task] = set()


def run_callable(fn: Callable[..., Any], args: tuple, kwargs: dict[str, Any]) -> None:
    """Invoke ``fn`` from a deferred context, discarding its result.

    Awaitable results are started as a task on the running loop, or driven to
    completion with ``asyncio.run`` when no loop is running in this thread.
    """
    result = fn(*args, **kwargs)
    if not inspect.isawaitable(result):
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(_await(result))
    else:
        task = loop.create_task(_await(result))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)


async def _await(awaitable: Any) -> Any:
    return await awaitable


async def await_shared(task: asyncio.Future) -> Any:
    """Await a task shared by several callers.

    Cancelling the caller cancels only its own wait; the task keeps running
    for every other caller awaiting it.
    """
    return await asyncio.shield(task)


class SystemScheduler:
    """Scheduler backed by the host clock.

    ``call_later`` uses the running asyncio loop when invoked from inside one,
    otherwise a daemon :class:`threading.Timer`.
    """

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        delay = max(0.0, delay)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(delay, callback, args)
            timer.daemon = True
            timer.start()
            return timer
        return loop.call_later(delay, callback, *args)

    def __repr__(self) -> str:
        return "SystemScheduler()"


@dataclass
class ManualHandle:
    """Handle for a callback queued on a :class:`ManualScheduler`."""

    deadline: float
    callback: Callable[..., Any]
    args: tuple
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Virtual clock for deterministic timing.

    Time only moves when :meth:`advance` is called. Due callbacks run in
    deadline order (ties in scheduling order) with ``now()`` set to their
    deadline, so callbacks that schedule further work see consistent time.
    Exceptions raised by callbacks propagate out of :meth:`advance`.

    Example:
        >>> clock = ManualScheduler(start=100.0)
        >>> clock.now()
        100.0
    """

    start: float = 0.0

    _now: float = field(default=0.0, init=False)
    _queue: list[tuple[float, int, ManualHandle]] = field(default_factory=list, init=False)
    _counter: itertools.count = field(default_factory=itertools.count, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def __post_init__(self):
        self._now = self.start

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        with self._lock:
            handle = ManualHandle(self._now + max(0.0, delay), callback, args)
            heapq.heappush(self._queue, (handle.deadline, next(self._counter), handle))
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due."""
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + seconds
        while True:
            with self._lock:
                if not self._queue or self._queue[0][0] > target:
                    break
                deadline, _, handle = heapq.heappop(self._queue)
                self._now = max(self._now, deadline)
            if not handle.cancelled:
                handle.callback(*handle.args)
        self._now = target

    def run_pending(self) -> None:
        """Run callbacks already due at the current time."""
        self.advance(0.0)

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that are neither run nor cancelled."""
        with self._lock:
            return sum(1 for _, _, handle in self._queue if not handle.cancelled)


_default_scheduler: Scheduler = SystemScheduler()
_default_lock = threading.Lock()


def get_default_scheduler() -> Scheduler:
    """Get the process-wide scheduler used when none is passed explicitly."""
    with _default_lock:
        return _default_scheduler


def set_default_scheduler(scheduler: Scheduler | None) -> Scheduler:
    """Replace the process-wide scheduler; ``None`` restores the system one.

    Returns:
        The previously installed scheduler.
    """
    global _default_scheduler
    with _default_lock:
        previous = _default_scheduler
        _default_scheduler = scheduler if scheduler is not None else SystemScheduler()
        return previous


__all__ = [
    "TimerHandle",
    "Scheduler",
    "SystemScheduler",
    "ManualHandle",
    "ManualScheduler",
    "run_callable",
    "await_shared",
    "name_of",
    "get_default_scheduler",
    "set_default_scheduler",
]
