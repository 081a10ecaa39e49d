"""JSON file adapter package for the entity registry."""

from __future__ import annotations

from .locking import exclusive_file_lock, lock_path_for
from .schema import ConstraintModel, EntityModel, RegistryDocument
from .store import JsonRegistryStore, atomic_write_text, parse_registry, render_registry
from .unit_of_work import RegistryFileUnitOfWork, build_store

__all__ = [
    "ConstraintModel",
    "EntityModel",
    "JsonRegistryStore",
    "RegistryDocument",
    "RegistryFileUnitOfWork",
    "atomic_write_text",
    "build_store",
    "exclusive_file_lock",
    "lock_path_for",
    "parse_registry",
    "render_registry",
]
