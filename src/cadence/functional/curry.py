"""Curry — partial application until a callable's declared arity is met.

The arity of ``fn`` is the number of positional parameters it declares
without a default. Calls accumulate arguments until that many positional
arguments are present (or the missing ones are supplied by keyword), then
``fn`` runs with everything accumulated; extra arguments pass through.

::

    c = curry(lambda a, b, c: a + b + c)
    c(1, 2, 3) == c(1)(2)(3) == c(1, 2)(3) == c(1)(b=2, c=3) == 6

Each partial step returns a new immutable :class:`Curried` node, so a
partially applied node can be reused for several continuations.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from cadence.core.errors import ConfigError, require_non_negative

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def required_positional(fn: Callable[..., Any]) -> tuple[str, ...]:
    """Names of the positional parameters of ``fn`` that have no default."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"cannot determine the arity of {fn!r}; pass arity= explicitly",
            cause=e,
        ) from e
    return tuple(
        p.name
        for p in signature.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


class Curried:
    """One partial-application state of a curried callable."""

    def __init__(
        self,
        fn: Callable[..., Any],
        arity: int,
        names: tuple[str, ...] = (),
        args: tuple = (),
        kwargs: dict[str, Any] | None = None,
    ):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._arity = arity
        self._names = names
        self._args = args
        self._kwargs = dict(kwargs or {})

    def _saturated(self, args: tuple, kwargs: dict[str, Any]) -> bool:
        if len(args) >= self._arity:
            return True
        missing = self._names[len(args):self._arity]
        return len(self._names) >= self._arity and all(name in kwargs for name in missing)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        args = self._args + args
        kwargs = {**self._kwargs, **kwargs}
        if self._saturated(args, kwargs):
            return self._fn(*args, **kwargs)
        return Curried(self._fn, self._arity, self._names, args, kwargs)

    def __repr__(self) -> str:
        return f"Curried({self._fn!r}, arity={self._arity}, args={self._args!r}, kwargs={self._kwargs!r})"


def curry(fn: Callable[..., Any] | None = None, arity: int | None = None) -> Any:
    """Curry ``fn`` on its declared arity (or an explicit ``arity``).

    Usable directly or as a decorator (``@curry`` / ``@curry(arity=2)``).

    Raises:
        ConfigError: If the arity cannot be determined from the signature and
            none was given, or if ``arity`` is negative.
    """
    if fn is None:
        return lambda func: curry(func, arity)

    if arity is None:
        names = required_positional(fn)
        arity = len(names)
    else:
        require_non_negative("arity", arity)
        try:
            names = required_positional(fn)
        except ConfigError:
            names = ()
    return Curried(fn, arity, names)


__all__ = ["Curried", "curry", "required_positional"]
