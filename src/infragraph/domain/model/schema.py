"""Pydantic models for the shape of a stored entity.

The same models check candidates before they are merged and documents when
they are loaded, so nothing is written that a later load would reject. The
models validate shape only; entities stay plain JSON objects.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ConstraintModel(RegistryBaseModel):
    type: str
    value: str


class EntityModel(RegistryBaseModel):
    # Legacy forge-project registrations were written without an id.
    id: str | None = None
    type: str | None = None
    kind: str | None = None
    constraints: list[ConstraintModel] | None = None

    @model_validator(mode="after")
    def _unique_constraint_types(self) -> EntityModel:
        counts = Counter(constraint.type for constraint in self.constraints or [])
        duplicates = sorted(kind for kind, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate constraint types: {', '.join(duplicates)}")
        return self


def summarize_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: msg; ...``."""

    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        messages.append(f"{location}: {error['msg']}")
    return "; ".join(messages)
