"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Broad category of a registry entity."""

    INFRA = "infra"
    FORGE_PROJECT = "forge-project"


class EntityKind(StrEnum):
    """Subtype within an entity type.

    The registry accepts kinds outside this list; these are the ones the
    built-in seed catalogue and the harvester emit.
    """

    DATABASE = "database"
    SERVICE = "service"
    K8S_RESOURCE = "k8s_resource"
    PIPELINE_STAGE = "pipeline_stage"


class ConstraintType(StrEnum):
    ACCESS = "access"
