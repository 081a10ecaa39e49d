"""Canonical deep equality for JSON values.

Objects compare independently of key order, arrays compare element by element
in order. Booleans are distinct from numbers even though Python treats
``True == 1``; integers and floats with the same numeric value are equal, as
they are in JSON.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

CanonicalForm: TypeAlias = tuple[Any, ...]


def canonical_form(value: object) -> CanonicalForm:
    """Return a hashable, order-normalised representation of a JSON value."""

    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, int | float):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value)
    if isinstance(value, Mapping):
        items = sorted((str(key), canonical_form(item)) for key, item in value.items())
        return ("object", tuple(items))
    if isinstance(value, Sequence):
        return ("array", tuple(canonical_form(item) for item in value))
    raise TypeError(f"Value of type {type(value).__name__} is not JSON-compatible")


def canonical_equal(left: object, right: object) -> bool:
    return canonical_form(left) == canonical_form(right)
