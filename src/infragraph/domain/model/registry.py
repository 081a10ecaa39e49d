"""Registry value object and entity accessors.

Entities are kept as plain JSON objects: the attribute bag is open and
kind-specific, and the registry must round-trip fields it does not know
about. Only ``id`` and ``constraints`` carry semantics for merging.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeAlias, TypedDict

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


Entity: TypeAlias = dict[str, Any]

ENTITIES_KEY = "entities"
LAST_UPDATED_KEY = "last_updated"
CONSTRAINTS_KEY = "constraints"


class Constraint(TypedDict):
    """Durable, type-tagged fact attached to an entity."""

    type: str
    value: str


def entity_id(entity: Entity) -> str | None:
    """Return the entity's id, or ``None`` for records without a usable one."""

    value = entity.get("id")
    if isinstance(value, str) and value:
        return value
    return None


def entity_constraints(entity: Entity) -> list[Constraint]:
    constraints = entity.get(CONSTRAINTS_KEY)
    if not constraints:
        return []
    return list(constraints)


def has_constraints(entity: Entity) -> bool:
    return bool(entity.get(CONSTRAINTS_KEY))


def index_of_entity(entities: Sequence[Entity], wanted: str) -> int | None:
    """Position of the entity whose id is ``wanted``; records without an id never match."""

    for index, entity in enumerate(entities):
        if entity_id(entity) == wanted:
            return index
    return None


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as an RFC3339 UTC timestamp with second precision."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(slots=True, kw_only=True)
class Registry:
    """In-memory view of one registry document.

    ``extra`` holds top-level keys other than ``entities`` and
    ``last_updated`` (``version``, ``relationships``, ...); ``key_order``
    remembers the document's original key layout so saving does not reshuffle
    the file.
    """

    entities: list[Entity] = field(default_factory=list["Entity"])
    last_updated: str | None = None
    extra: dict[str, Any] = field(default_factory=dict[str, Any])
    key_order: tuple[str, ...] = (ENTITIES_KEY, LAST_UPDATED_KEY)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Registry:
        extra = {
            key: deepcopy(value)
            for key, value in document.items()
            if key not in (ENTITIES_KEY, LAST_UPDATED_KEY)
        }
        return cls(
            entities=deepcopy(list(document.get(ENTITIES_KEY, []))),
            last_updated=document.get(LAST_UPDATED_KEY),
            extra=extra,
            key_order=tuple(document),
        )

    def to_document(self) -> dict[str, Any]:
        values: dict[str, Any] = {
            **self.extra,
            ENTITIES_KEY: self.entities,
            LAST_UPDATED_KEY: self.last_updated,
        }
        ordered = {key: values[key] for key in self.key_order if key in values}
        for key, value in values.items():
            ordered.setdefault(key, value)
        return deepcopy(ordered)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    def index_of(self, wanted: str) -> int | None:
        return index_of_entity(self.entities, wanted)

    def find(self, wanted: str) -> Entity | None:
        index = self.index_of(wanted)
        return None if index is None else self.entities[index]

    def ids(self) -> list[str]:
        return [value for value in (entity_id(entity) for entity in self.entities) if value]

    def count(self, entity_type: str | None = None) -> int:
        if entity_type is None:
            return len(self.entities)
        return sum(1 for entity in self.entities if entity.get("type") == entity_type)

    def evolve(
        self,
        *,
        entities: Sequence[Entity] | None = None,
        touched_at: datetime | None = None,
    ) -> Registry:
        """Return a copy with new entities and/or a refreshed ``last_updated``."""

        new_entities = deepcopy(list(entities if entities is not None else self.entities))
        last_updated = format_timestamp(touched_at) if touched_at else self.last_updated
        return replace(
            self,
            entities=new_entities,
            last_updated=last_updated,
            extra=deepcopy(self.extra),
        )
