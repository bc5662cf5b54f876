"""Memoize — unbounded result cache keyed by the canonical form of the arguments.

Manifesto:
    ``functools.lru_cache`` keys on hashability and identity; a dict argument
    is rejected and two equal lists are different keys. ``memoize`` keys on
    *structure* instead: argument lists that encode to the same canonical
    string share one cache entry, whatever their identity.

ARCHITECTURE
────────────
::

    w(*args, **kwargs)
      │
      ▼
    key = argument_key(args, kwargs)      # cadence.core.encoding
      │
      ├── key in cache ─▶ cached value    (fn not called)
      └── miss ─▶ value = fn(*args, **kwargs); cache[key] = value

Guardrails:
    - No eviction: the cache lives as long as the wrapper; drop the wrapper
      to release memory
    - Unencodable arguments (cycles, functions, arbitrary objects) raise
      ``SerializationError`` before ``fn`` runs
    - Exceptions from ``fn`` propagate and nothing is cached
    - Coroutine functions cache the task started by the first call per key
      (a running loop is required); every caller with that key awaits it.
      Cancelling one caller leaves the task running for the others, and a
      task that fails or is cancelled is evicted

Tags:
    cadence, functional, memoize, cache

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import threading
from collections.abc import Callable
from typing import Any

from cadence.core.clock import await_shared
from cadence.core.encoding import argument_key


class Memoized:
    """Callable wrapper caching ``fn`` results by canonical argument key."""

    def __init__(self, fn: Callable[..., Any]):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._is_async = inspect.iscoroutinefunction(fn)
        self._cache: dict[str, Any] = {}
        self._lock = threading.RLock()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key = argument_key(args, kwargs)

        with self._lock:
            if self._is_async:
                return await_shared(self._task_for(key, args, kwargs))
            if key not in self._cache:
                self._cache[key] = self._fn(*args, **kwargs)
            return self._cache[key]

    def _task_for(self, key: str, args: tuple, kwargs: dict[str, Any]) -> asyncio.Task:
        task = self._cache.get(key)
        if task is None:
            loop = asyncio.get_running_loop()
            task = loop.create_task(self._fn(*args, **kwargs))
            task.add_done_callback(functools.partial(self._evict_unsuccessful, key))
            self._cache[key] = task
        return task

    def _evict_unsuccessful(self, key: str, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is None:
            return
        with self._lock:
            if self._cache.get(key) is task:
                del self._cache[key]

    def __repr__(self) -> str:
        return f"Memoized({self._fn!r})"


def memoize(fn: Callable[..., Any]) -> Memoized:
    """Cache ``fn`` by the canonical encoding of its arguments.

    Works as a plain call or a decorator::

        lookup = memoize(fetch_rate)

        @memoize
        def parse(document: dict) -> Report: ...
    """
    return Memoized(fn)


__all__ = ["Memoized", "memoize"]
