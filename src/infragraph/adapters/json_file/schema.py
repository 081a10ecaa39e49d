"""Pydantic model describing the on-disk registry document.

The model validates shape only. Loaded data is kept as the raw JSON objects so
unknown fields round-trip untouched.
"""

from __future__ import annotations

from collections import Counter

from pydantic import model_validator

from infragraph.domain.model.schema import ConstraintModel, EntityModel, RegistryBaseModel

__all__ = ["ConstraintModel", "EntityModel", "RegistryDocument"]


class RegistryDocument(RegistryBaseModel):
    entities: list[EntityModel]
    last_updated: str | None = None

    @model_validator(mode="after")
    def _unique_ids(self) -> RegistryDocument:
        counts = Counter(entity.id for entity in self.entities if entity.id)
        duplicates = sorted(entity_id for entity_id, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate entity ids: {', '.join(duplicates)}")
        return self
