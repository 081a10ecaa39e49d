"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any

from infragraph.adapters.json_file import JsonRegistryStore, RegistryFileUnitOfWork
from infragraph.config import get_registry_config
from infragraph.domain.merge import Appended, MergeOutcome, merge_candidate, parse_candidate
from infragraph.domain.model import Registry
from infragraph.domain.seeding import SeedResult, seed_registry
from infragraph.domain.seeds import DEFAULT_SEED_ENTITIES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from infragraph.config import RegistryConfig
    from infragraph.domain.model import Entity
    from infragraph.domain.ports import RegistryUnitOfWork

UnitOfWorkFactory = Callable[["RegistryConfig"], "RegistryUnitOfWork"]
Clock = Callable[[], datetime]

EMPTY_REGISTRY_DOCUMENT: dict[str, Any] = {
    "version": "1.0",
    "last_updated": None,
    "entities": [],
    "relationships": [],
}

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _default_unit_of_work(config: RegistryConfig) -> RegistryUnitOfWork:
    return RegistryFileUnitOfWork(config.path, lock_mode=config.lock_mode)


def merge_entity(
    candidate: Entity | str,
    *,
    config: RegistryConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = _utcnow,
) -> MergeOutcome:
    """Merge one harvested candidate into the registry.

    Only an append is persisted. Skips write nothing, and conflicts leave the
    registry untouched for the caller to resolve.
    """

    effective_config = config or get_registry_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work

    with effective_uow(effective_config) as uow:
        parsed = parse_candidate(candidate) if isinstance(candidate, str) else candidate
        outcome = merge_candidate(uow.registry, parsed, now=clock())
        if isinstance(outcome, Appended):
            uow.commit(outcome.registry)

    log.info("Merge of %s finished: %s", outcome.entity_id, outcome.status)
    return outcome


def seed_global_graph(
    *,
    config: RegistryConfig | None = None,
    seeds: Sequence[Entity] = DEFAULT_SEED_ENTITIES,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = _utcnow,
) -> SeedResult:
    """Apply the seed catalogue to the registry and persist it once."""

    effective_config = config or get_registry_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work

    with effective_uow(effective_config) as uow:
        result = seed_registry(uow.registry, seeds, now=clock())
        uow.commit(result.registry)

    log.info(
        "Finished seeding %s: total=%s, infra=%s",
        effective_config.path,
        result.total,
        result.infra,
    )
    return result


def init_registry(*, config: RegistryConfig | None = None) -> tuple[Path, bool]:
    """Create an empty registry unless one already exists at the configured path."""

    effective_config = config or get_registry_config()
    created = JsonRegistryStore().create(
        effective_config.path,
        Registry.from_document(EMPTY_REGISTRY_DOCUMENT),
    )
    return effective_config.path, created
