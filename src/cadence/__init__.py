"""
cadence - function-control utilities.

Higher-order wrappers that change the timing or repetition of an arbitrary
callable: debounce, throttle, once, memoize, curry, deep_clone, sleep, retry
and poll.

- cadence.core:       clock substrate, errors, encoding, logging, settings
- cadence.execution:  debounce, throttle, sleep, retry, poll
- cadence.functional: once, memoize, curry, deep_clone
"""

__version__ = "0.1.0"

from cadence.core.errors import (
    CadenceError,
    ConfigError,
    ExhaustionError,
    MaxAttemptsReached,
    MaxRetriesReached,
    SerializationError,
)
from cadence.core.logging import configure_logging, get_logger
from cadence.execution import Debounced, Throttled, debounce, poll, retry, sleep, throttle
from cadence.functional import Curried, Memoized, Once, curry, deep_clone, memoize, once

__all__ = [
    "__version__",
    # wrappers
    "debounce",
    "throttle",
    "once",
    "memoize",
    "curry",
    "deep_clone",
    "sleep",
    "retry",
    "poll",
    "Debounced",
    "Throttled",
    "Once",
    "Memoized",
    "Curried",
    # errors
    "CadenceError",
    "ConfigError",
    "ExhaustionError",
    "MaxRetriesReached",
    "MaxAttemptsReached",
    "SerializationError",
    # logging
    "configure_logging",
    "get_logger",
]
