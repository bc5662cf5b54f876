"""
Canonical structural encoding for argument keys.

Provides a deterministic string form for plain data so that two argument lists
map to the same memoization key exactly when they are structurally equal,
independent of object identity or dict insertion order.

Manifesto:
    Cache keys must be stable, reproducible, and structural:
    - **Deterministic:** Same inputs always produce the same key
    - **Order-independent mappings:** ``{"a": 1, "b": 2}`` == ``{"b": 2, "a": 1}``
    - **Order-dependent sequences:** ``(a, b)`` != ``(b, a)``
    - **Explicit failure:** Cycles and non-data values raise, never miscompile

Architecture:
    ::

        canonical_encode(value) ── JSON (sort_keys, compact separators)
              │                     + structural default hook
              ▼
        argument_key(args, kwargs) ── encode([args, kwargs])

    Structural default hook:
        set / frozenset     → sorted list of canonical members
        datetime / date     → ISO-8601 string
        Decimal / UUID      → str
        Enum                → its value
        dataclass instance  → dataclasses.asdict
        pydantic model      → model_dump(mode="json")

    Anything else (functions, arbitrary objects) raises SerializationError.

Examples:
    >>> canonical_encode({"b": 2, "a": [1, 2]})
    '{"a":[1,2],"b":2}'
    >>> argument_key((1, "x"), {}) == argument_key([1, "x"], {})
    True

Guardrails:
    - Tuples and lists encode identically (both are ordered sequences)
    - Non-string dict keys are stringified by JSON, so ``{1: x}`` and
      ``{"1": x}`` share a key
    - ``1``, ``1.0`` and ``True`` encode differently

Tags:
    encoding, memoization, cache-key, cadence

Doc-Types:
    api-reference
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from cadence.core.errors import SerializationError


def _structural_default(value: Any) -> Any:
    """JSON ``default`` hook mapping supported non-JSON values to plain data."""
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=canonical_encode)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} has no canonical form")


def canonical_encode(value: Any) -> str:
    """
    Encode a value to its canonical string form.

    Args:
        value: Plain data (mappings, sequences, primitives) or one of the
            structurally supported types listed in the module docstring.

    Returns:
        Compact JSON with sorted keys.

    Raises:
        SerializationError: If the value is cyclic or has no structural form.
    """
    return _dumps(value, sort_keys=True)


def plain_encode(value: Any) -> str:
    """Encode a value like :func:`canonical_encode` but keep mapping order.

    Used where the output is decoded again (plain cloning) rather than
    compared, so dict insertion order survives the round trip.
    """
    return _dumps(value, sort_keys=False)


def _dumps(value: Any, *, sort_keys: bool) -> str:
    try:
        return json.dumps(
            value,
            sort_keys=sort_keys,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=True,
            default=_structural_default,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(
            f"cannot encode {type(value).__name__}: {e}",
            cause=e,
        ) from e


def argument_key(args: tuple | list, kwargs: dict[str, Any]) -> str:
    """Canonical key for a full argument list (positional and keyword)."""
    return canonical_encode([list(args), kwargs])


__all__ = [
    "canonical_encode",
    "plain_encode",
    "argument_key",
]
