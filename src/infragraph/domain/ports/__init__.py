"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import RegistryStore
from .unit_of_work import RegistryUnitOfWork

__all__ = [
    "RegistryStore",
    "RegistryUnitOfWork",
]
