"""Unit-of-work abstraction around one read-compute-write cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from infragraph.domain.model import Registry


@runtime_checkable
class RegistryUnitOfWork(Protocol):
    """Scope in which the registry is loaded, and at most once committed.

    Implementations may hold a lock for the lifetime of the scope. Leaving the
    scope without ``commit`` writes nothing.
    """

    @property
    def registry(self) -> Registry: ...

    @property
    def committed(self) -> bool: ...

    def __enter__(self) -> RegistryUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self, registry: Registry) -> None: ...
