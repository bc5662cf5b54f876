"""cadence execution — wrappers that change *when* a callable runs.

ARCHITECTURE
────────────
::

    Timing (synchronous call sites, deferred work via core.clock.Scheduler)
      ├── debounce.py  ─ one trailing call per quiet period
      └── throttle.py  ─ leading call + one trailing call per window

    Resilience (asyncio coroutines)
      ├── sleep.py     ─ awaitable delay fixed at creation
      ├── retry.py     ─ re-attempt on failure, fixed delay, bounded
      └── poll.py      ─ re-attempt until a predicate holds, bounded
"""

from cadence.execution.debounce import Debounced, debounce
from cadence.execution.poll import poll
from cadence.execution.retry import retry
from cadence.execution.sleep import sleep
from cadence.execution.throttle import Throttled, throttle

__all__ = [
    "Debounced",
    "debounce",
    "Throttled",
    "throttle",
    "sleep",
    "retry",
    "poll",
]
