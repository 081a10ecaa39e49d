"""Single-candidate merge with conflict detection.

Identity is by ``id`` only. A candidate either:
- introduces a new id -> appended
- matches the stored entity once existing constraints are carried over -> skipped
- diverges from the stored entity -> conflict, reported and never auto-resolved

The engine is pure: it receives a loaded ``Registry`` and returns an outcome.
Only ``Appended`` carries a registry to persist; skip and conflict leave the
caller nothing to write.
"""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Literal, TypeAlias

from pydantic import ValidationError

from infragraph.domain.constraints import merge_constraints
from infragraph.domain.equality import canonical_equal
from infragraph.domain.errors import InvalidCandidateError
from infragraph.domain.model import (
    CONSTRAINTS_KEY,
    entity_constraints,
    entity_id,
    has_constraints,
)
from infragraph.domain.model.schema import EntityModel, summarize_validation_error

if TYPE_CHECKING:
    from datetime import datetime

    from infragraph.domain.model import Entity, Registry

log = getLogger(__name__)


class MergeStatus(StrEnum):
    SKIPPED = "skipped"
    APPENDED = "appended"
    CONFLICT = "conflict"


@dataclass(slots=True, kw_only=True)
class Skipped:
    """Stored entity already matches the candidate."""

    entity_id: str
    status: Literal[MergeStatus.SKIPPED] = MergeStatus.SKIPPED


@dataclass(slots=True, kw_only=True)
class Appended:
    """Candidate introduced a new id; ``registry`` is the value to persist."""

    entity_id: str
    registry: Registry
    status: Literal[MergeStatus.APPENDED] = MergeStatus.APPENDED


@dataclass(slots=True, kw_only=True)
class Conflict:
    """Same id, divergent metadata. Needs manual resolution."""

    entity_id: str
    existing: Entity
    candidate: Entity
    status: Literal[MergeStatus.CONFLICT] = MergeStatus.CONFLICT


MergeOutcome: TypeAlias = Skipped | Appended | Conflict


def parse_candidate(raw: str) -> Entity:
    """Decode a candidate entity from JSON text."""

    try:
        candidate = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidCandidateError(f"candidate entity JSON is invalid: {exc.msg}") from exc
    validate_candidate(candidate)
    return candidate


def validate_candidate(candidate: object) -> str:
    """Return the candidate's id or raise ``InvalidCandidateError``."""

    if not isinstance(candidate, dict):
        raise InvalidCandidateError("candidate entity must be a JSON object")
    try:
        EntityModel.model_validate(candidate)
    except ValidationError as exc:
        raise InvalidCandidateError(
            f"candidate entity is malformed: {summarize_validation_error(exc)}"
        ) from exc
    candidate_id = entity_id(candidate)
    if candidate_id is None:
        raise InvalidCandidateError("candidate entity JSON is missing .id")
    return candidate_id


def constraint_safe_candidate(existing: Entity, candidate: Entity) -> Entity:
    """Overlay the existing entity's constraints onto the candidate."""

    if not has_constraints(existing):
        return deepcopy(candidate)
    safe = deepcopy(candidate)
    safe[CONSTRAINTS_KEY] = merge_constraints(
        entity_constraints(existing),
        candidate.get(CONSTRAINTS_KEY),
    )
    return safe


def merge_candidate(registry: Registry, candidate: Entity, *, now: datetime) -> MergeOutcome:
    """Decide skip / append / conflict for ``candidate`` against ``registry``."""

    candidate_id = validate_candidate(candidate)
    existing = registry.find(candidate_id)

    if existing is None:
        log.debug("No entity with id %s; appending", candidate_id)
        updated = registry.evolve(entities=[*registry.entities, candidate], touched_at=now)
        return Appended(entity_id=candidate_id, registry=updated)

    safe_candidate = constraint_safe_candidate(existing, candidate)
    if canonical_equal(existing, safe_candidate):
        log.debug("Entity %s already current", candidate_id)
        return Skipped(entity_id=candidate_id)

    log.info("Conflict detected for entity %s", candidate_id)
    return Conflict(
        entity_id=candidate_id,
        existing=deepcopy(existing),
        candidate=safe_candidate,
    )
