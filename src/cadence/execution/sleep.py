"""Awaitable delay whose deadline is fixed when it is created."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable

from cadence.core.errors import require_non_negative


def sleep(seconds: float) -> Awaitable[None]:
    """Return an awaitable that completes no earlier than ``seconds`` from now.

    The deadline is taken when ``sleep`` is called, not when the result is
    first awaited, so work done in between counts against the delay.
    Awaiting always yields to the event loop at least once, even for
    ``sleep(0)`` or a deadline that has already passed.

    Example:
        >>> pause = sleep(0.5)
        >>> prepare_request()      # counts towards the 0.5s
        >>> await pause

    Raises:
        ConfigError: If ``seconds`` is negative.
    """
    require_non_negative("seconds", seconds)
    return _sleep_until(time.monotonic() + seconds)


async def _sleep_until(deadline: float) -> None:
    # always suspend at least once, even for an elapsed deadline
    await asyncio.sleep(max(deadline - time.monotonic(), 0))
    # asyncio may wake a timer up to one clock resolution early
    remaining = deadline - time.monotonic()
    while remaining > 0:
        await asyncio.sleep(remaining)
        remaining = deadline - time.monotonic()


__all__ = ["sleep"]
