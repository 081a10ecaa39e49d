"""Error taxonomy for registry operations.

Every error is terminal for the current invocation. None of them is raised
after a registry write has started, so the file on disk is untouched whenever
one of these propagates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class RegistryError(Exception):
    """Base class for registry failures."""


class UsageError(RegistryError):
    """Raised when the command line is malformed."""


class DependencyMissingError(RegistryError):
    """Raised when a runtime facility required by the configuration is unavailable."""


class RegistryNotFoundError(RegistryError):
    """Raised when the registry file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Registry not found: {path}")


class InvalidRegistryFormatError(RegistryError):
    """Raised when the registry file is not a well-formed registry document."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Registry {path} is not a valid registry document: {detail}")


class InvalidCandidateError(RegistryError, ValueError):
    """Raised when a candidate entity is unparsable or lacks an ``id``."""


class ConcurrentModificationError(RegistryError):
    """Raised when the registry changed on disk between load and save."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Registry {path} was modified by another writer since it was loaded; re-run"
        )
