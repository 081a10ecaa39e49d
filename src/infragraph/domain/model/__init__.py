"""Public domain model surface."""

from __future__ import annotations

from infragraph.domain.model.enums import ConstraintType, EntityKind, EntityType
from infragraph.domain.model.registry import (
    CONSTRAINTS_KEY,
    Constraint,
    Entity,
    Registry,
    entity_constraints,
    entity_id,
    format_timestamp,
    has_constraints,
    index_of_entity,
)

__all__ = [
    "CONSTRAINTS_KEY",
    "Constraint",
    "ConstraintType",
    "Entity",
    "EntityKind",
    "EntityType",
    "Registry",
    "entity_constraints",
    "entity_id",
    "format_timestamp",
    "has_constraints",
    "index_of_entity",
]
