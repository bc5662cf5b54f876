"""cadence functional — wrappers that change *how often* a callable's body runs.

::

    once.py     ─ first call runs, every later call replays its result
    memoize.py  ─ one call per distinct canonical argument list
    curry.py    ─ partial application up to the declared arity
    clone.py    ─ deep copies (structural or plain-data round trip)
"""

from cadence.functional.clone import deep_clone
from cadence.functional.curry import Curried, curry
from cadence.functional.memoize import Memoized, memoize
from cadence.functional.once import Once, once

__all__ = [
    "Once",
    "once",
    "Memoized",
    "memoize",
    "Curried",
    "curry",
    "deep_clone",
]
