"""
Structured error types for cadence.

cadence synthesizes very few errors of its own. The wrappers are transparent
for anything the wrapped callable raises; the only errors created here mean
"a bound was reached", "an argument could not be encoded", or "the wrapper was
configured with impossible values".

Manifesto:
    - **Typed hierarchy:** Callers catch ``ExhaustionError`` for any bound
    - **Context travels:** Attempt counts and the last failure ride on the error
    - **Chained causes:** The final underlying failure is ``__cause__``
    - **Builtin-compatible:** Config/serialization errors are also
      ``ValueError``/``TypeError`` so generic handlers still work

Architecture:
    ::

        CadenceError  (category, context, cause)
          ├── ExhaustionError        (attempts)
          │     ├── MaxRetriesReached    (last_error)
          │     └── MaxAttemptsReached   (last_result)
          ├── SerializationError     (+ TypeError)
          └── ConfigError            (+ ValueError)

Examples:
    >>> try:
    ...     raise MaxRetriesReached(attempts=4, last_error=ValueError("boom"))
    ... except ExhaustionError as e:
    ...     e.attempts
    4

    >>> ConfigError("wait must be >= 0").with_context(wait=-1).to_dict()["context"]
    {'wait': -1}

Tags:
    error-handling, exception-hierarchy, retry, cadence

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Classification of cadence errors for routing and reporting."""

    EXHAUSTION = "EXHAUSTION"  # retry/poll bound reached
    SERIALIZATION = "SERIALIZATION"  # canonical encoding / plain clone failed
    CONFIG = "CONFIG"  # invalid wrapper configuration
    INTERNAL = "INTERNAL"


class CadenceError(Exception):
    """
    Base exception for all errors synthesized by cadence.

    Carries a category, a free-form context mapping for structured logging,
    and an optional cause which is chained as ``__cause__``.

    Subclasses set ``default_category`` and, where the message is fixed,
    ``default_message``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_message: str = "cadence error"

    def __init__(
        self,
        message: str | None = None,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        message = message if message is not None else self.default_message
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CadenceError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("bad interval").with_context(interval=-1)
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# EXHAUSTION ERRORS
# =============================================================================


class ExhaustionError(CadenceError):
    """A bounded re-attempt loop ran out of attempts without success.

    Attributes:
        attempts: Total number of calls made to the operation.
    """

    default_category = ErrorCategory.EXHAUSTION
    default_message = "Max attempts reached"

    def __init__(self, message: str | None = None, *, attempts: int = 0, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.attempts = attempts
        self.context.setdefault("attempts", attempts)


class MaxRetriesReached(ExhaustionError):
    """Raised by :func:`cadence.retry` once every retry has failed.

    ``last_error`` is the failure of the final attempt, also chained as
    ``__cause__``.
    """

    default_message = "Max retries reached"

    def __init__(
        self,
        message: str | None = None,
        *,
        attempts: int = 0,
        last_error: BaseException | None = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("cause", last_error)
        super().__init__(message, attempts=attempts, **kwargs)
        self.last_error = last_error


class MaxAttemptsReached(ExhaustionError):
    """Raised by :func:`cadence.poll` when the predicate never held.

    ``last_result`` is the value returned by the final attempt.
    """

    default_message = "Max attempts reached"

    def __init__(
        self,
        message: str | None = None,
        *,
        attempts: int = 0,
        last_result: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, attempts=attempts, **kwargs)
        self.last_result = last_result


# =============================================================================
# INPUT ERRORS
# =============================================================================


class SerializationError(CadenceError, TypeError):
    """A value could not be canonically encoded or plainly cloned.

    Covers cyclic structures, functions, and objects with no structural form.
    """

    default_category = ErrorCategory.SERIALIZATION
    default_message = "value cannot be serialized"


class ConfigError(CadenceError, ValueError):
    """A wrapper was configured with invalid values (e.g. a negative delay)."""

    default_category = ErrorCategory.CONFIG
    default_message = "invalid configuration"


def require_non_negative(name: str, value: float) -> float:
    """Validate a duration or count, raising :class:`ConfigError` if negative."""
    if value < 0:
        raise ConfigError(f"{name} must be >= 0, got {value!r}").with_context(**{name: value})
    return value


__all__ = [
    "ErrorCategory",
    "CadenceError",
    "ExhaustionError",
    "MaxRetriesReached",
    "MaxAttemptsReached",
    "SerializationError",
    "ConfigError",
    "require_non_negative",
]
