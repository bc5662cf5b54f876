"""Deep clone — structurally independent copies of nested data.

Two modes:

- **Structural (default):** ``copy.deepcopy``. Every container is copied,
  object types are preserved, and self-references are reproduced inside the
  clone (``clone["self"] is clone``).
- **Plain (``plain=True``):** a JSON round trip through the plain encoder,
  which keeps mapping order. The result contains only ``dict``/``list``/
  ``str``/``int``/``float``/``bool``/``None``; tuples become lists and
  supported rich types (sets, datetimes, dataclasses, pydantic models) become
  their plain form. Cycles and values with no plain form raise
  ``SerializationError`` instead of looping.

Example:
    >>> original = {"a": 1, "b": {"c": [2, 3]}}
    >>> copy_ = deep_clone(original)
    >>> copy_["b"]["c"].append(4)
    >>> original["b"]["c"]
    [2, 3]
"""

from __future__ import annotations

import copy
import json
from typing import Any, TypeVar

from cadence.core.encoding import plain_encode

T = TypeVar("T")


def deep_clone(value: T, *, plain: bool = False) -> T:
    """Return a deep copy of ``value``.

    Args:
        value: Data to copy
        plain: Round-trip through JSON instead of a structural copy

    Raises:
        SerializationError: In plain mode, for cyclic or non-data values.
    """
    if plain:
        return json.loads(plain_encode(value))
    return copy.deepcopy(value)


__all__ = ["deep_clone"]
