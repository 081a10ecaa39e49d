"""Constraint union shared by the merge and seed policies."""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from infragraph.domain.model import Constraint


def merge_constraints(
    existing: Iterable[Constraint] | None,
    incoming: Iterable[Constraint] | None,
) -> list[Constraint]:
    """Union two constraint lists, deduplicated by ``type``.

    ``existing`` is placed ahead of ``incoming`` and the first entry seen for
    each type is kept, so a recorded constraint value is never replaced by an
    incoming one. Types only present in ``incoming`` are appended after the
    existing entries in their incoming order.
    """

    merged: list[Constraint] = []
    seen: set[str] = set()
    for constraint in [*(existing or ()), *(incoming or ())]:
        constraint_type = constraint["type"]
        if constraint_type in seen:
            continue
        seen.add(constraint_type)
        merged.append(deepcopy(constraint))
    return merged
