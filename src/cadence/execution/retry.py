"""Retry — bounded re-attempts with a fixed delay for fallible async work.

Manifesto:
    Transient failures (a dropped connection, a 503) usually clear up if the
    caller waits a moment and asks again. ``retry`` makes that loop explicit
    and bounded: one initial attempt, ``max_retries`` further attempts, a
    fixed ``delay`` between them, and a single distinguished error when the
    budget runs out.

ARCHITECTURE
────────────
::

    attempt 1 ── ok ──────────────────────────────▶ result
       │ error
       ▼
    retries left? ── no ──▶ MaxRetriesReached(attempts, last_error)
       │ yes
       ▼
    on_retry(attempt, error, delay); await sleep(delay)
       │
       ▼
    attempt 2 ... attempt max_retries + 1

    Total attempts on the all-failing path: max_retries + 1
    Minimum elapsed time on that path:      max_retries * delay

Guardrails:
    - ``operation`` takes no arguments; previous errors are never passed in
    - Only ``Exception`` is retried; cancelling the awaiting task stops the
      loop at its current suspension point
    - No timeout wraps ``operation``; a hung attempt hangs the whole call

Example::

    payload = await retry(lambda: client.get("/status"), max_retries=3, delay=0.5)

Tags:
    cadence, execution, retry, resilience

Doc-Types:
    api-reference
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from cadence.core.clock import name_of
from cadence.core.errors import MaxRetriesReached, require_non_negative
from cadence.core.logging import get_logger
from cadence.execution.sleep import sleep

T = TypeVar("T")

logger = get_logger(__name__)


async def retry(
    operation: Callable[[], Awaitable[T] | T],
    max_retries: int,
    delay: float,
    *,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the retry budget is spent.

    Args:
        operation: Argument-less callable returning an awaitable (or a plain
            value, for synchronous work)
        max_retries: Retries allowed after the first attempt
        delay: Seconds to wait between attempts
        on_retry: Called before each wait with (attempt, error, delay)

    Returns:
        The result of the first successful attempt.

    Raises:
        MaxRetriesReached: After ``max_retries + 1`` failed attempts; the last
            failure is chained as ``__cause__``.
        ConfigError: If ``max_retries`` or ``delay`` is negative.
    """
    require_non_negative("max_retries", max_retries)
    require_non_negative("delay", delay)

    attempt = 0
    while True:
        attempt += 1
        try:
            result = operation()
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            if attempt > max_retries:
                logger.debug(
                    "retry_exhausted",
                    operation=name_of(operation),
                    attempts=attempt,
                    error=repr(e),
                )
                raise MaxRetriesReached(attempts=attempt, last_error=e) from e

            logger.debug(
                "retry_attempt_failed",
                operation=name_of(operation),
                attempt=attempt,
                delay=delay,
                error=repr(e),
            )
            if on_retry:
                on_retry(attempt, e, delay)

        await sleep(delay)


__all__ = ["retry"]
