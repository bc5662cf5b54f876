"""Poll — repeat an async operation until its result satisfies a predicate.

Unlike :func:`cadence.retry`, failures are not the trigger: every attempt
succeeds or raises, and it is the *result* that decides whether to go again.
Errors from ``operation`` or ``predicate`` propagate immediately.

::

    attempt 1 ─▶ predicate(result)? ── yes ─▶ result
                     │ no
                     ▼
             attempts == max_attempts? ── yes ─▶ MaxAttemptsReached
                     │ no
                     ▼
             await sleep(interval) ─▶ attempt 2 ...

    Calls on full exhaustion:        exactly max_attempts
    Minimum elapsed on exhaustion:   (max_attempts - 1) * interval

Example::

    job = await poll(lambda: api.job(job_id), lambda j: j.done, interval=2.0, max_attempts=30)
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TypeVar

from cadence.core.clock import name_of
from cadence.core.errors import ConfigError, MaxAttemptsReached, require_non_negative
from cadence.core.logging import get_logger
from cadence.execution.sleep import sleep

T = TypeVar("T")

logger = get_logger(__name__)


async def poll(
    operation: Callable[[], Awaitable[T] | T],
    predicate: Callable[[T], bool],
    interval: float,
    max_attempts: int,
) -> T:
    """Call ``operation`` every ``interval`` seconds until ``predicate`` holds.

    Args:
        operation: Argument-less callable returning an awaitable (or a value)
        predicate: Decides whether a result is final
        interval: Seconds to wait between attempts
        max_attempts: Upper bound on calls to ``operation`` (>= 1)

    Returns:
        The first result for which ``predicate`` returned true.

    Raises:
        MaxAttemptsReached: After ``max_attempts`` unsatisfying results.
        ConfigError: If ``max_attempts < 1`` or ``interval`` is negative.
    """
    require_non_negative("interval", interval)
    if max_attempts < 1:
        raise ConfigError(f"max_attempts must be >= 1, got {max_attempts!r}").with_context(
            max_attempts=max_attempts
        )

    attempts = 0
    while True:
        result = operation()
        if inspect.isawaitable(result):
            result = await result
        attempts += 1

        if predicate(result):
            return result
        if attempts >= max_attempts:
            logger.debug("poll_exhausted", operation=name_of(operation), attempts=attempts)
            raise MaxAttemptsReached(attempts=attempts, last_result=result)

        logger.debug("poll_attempt_unsatisfied", operation=name_of(operation), attempt=attempts)
        await sleep(interval)


__all__ = ["poll"]
