"""Authoritative batch seeding.

Unlike ``merge_candidate``, seeding never reports conflicts: seed data wins for
every field except ``constraints``, which are unioned with whatever the
registry already recorded. Seeds are folded left to right over one registry
value and ``last_updated`` is refreshed once at the end.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from infragraph.domain.constraints import merge_constraints
from infragraph.domain.merge import validate_candidate
from infragraph.domain.model import (
    CONSTRAINTS_KEY,
    EntityType,
    entity_constraints,
    has_constraints,
    index_of_entity,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from infragraph.domain.model import Entity, Registry

log = getLogger(__name__)


@dataclass(slots=True)
class SeedResult:
    """Outcome of a seeding run."""

    registry: Registry
    appended: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.registry.count()

    @property
    def infra(self) -> int:
        return self.registry.count(EntityType.INFRA)


def seed_registry(registry: Registry, seeds: Sequence[Entity], *, now: datetime) -> SeedResult:
    """Fold ``seeds`` into ``registry`` using the authoritative-update policy."""

    for seed in seeds:
        validate_candidate(seed)

    entities = deepcopy(registry.entities)
    appended = 0
    updated = 0
    for seed in seeds:
        index = index_of_entity(entities, seed["id"])
        if index is None:
            entities.append(deepcopy(seed))
            appended += 1
            continue
        entities[index] = overlay_seed(entities[index], seed)
        updated += 1

    log.info("Seeded %s entities: appended=%s, updated=%s", len(seeds), appended, updated)
    return SeedResult(
        registry=registry.evolve(entities=entities, touched_at=now),
        appended=appended,
        updated=updated,
    )


def overlay_seed(existing: Entity, seed: Entity) -> Entity:
    """Replace ``existing`` with ``seed`` while keeping recorded constraints."""

    merged = deepcopy(seed)
    if has_constraints(existing):
        merged[CONSTRAINTS_KEY] = merge_constraints(
            entity_constraints(existing),
            seed.get(CONSTRAINTS_KEY),
        )
    return merged
