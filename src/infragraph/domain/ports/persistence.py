"""Ports for loading and persisting the registry document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from infragraph.domain.model import Registry


@runtime_checkable
class RegistryStore(Protocol):
    """Whole-document storage for one registry file.

    ``load`` raises ``RegistryNotFoundError`` or ``InvalidRegistryFormatError``;
    ``save`` replaces the stored document wholesale.
    """

    def load(self, path: Path) -> Registry: ...

    def save(self, path: Path, registry: Registry) -> None: ...
