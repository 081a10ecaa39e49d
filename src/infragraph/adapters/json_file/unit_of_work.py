from __future__ import annotations

from contextlib import ExitStack
from typing import TYPE_CHECKING, Literal

from infragraph.config import DEFAULT_LOCK_MODE, LockMode
from infragraph.domain.ports import RegistryUnitOfWork

from .locking import exclusive_file_lock
from .store import JsonRegistryStore

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from infragraph.domain.model import Registry
    from infragraph.domain.ports import RegistryStore


def build_store(lock_mode: LockMode) -> JsonRegistryStore:
    return JsonRegistryStore(verify_unchanged=lock_mode is LockMode.CAS)


class RegistryFileUnitOfWork(RegistryUnitOfWork):
    """Load on enter, write on ``commit``, release on exit.

    In ``flock`` mode the lock is taken before the load and held until the
    scope ends, covering the whole read-compute-write cycle.
    """

    def __init__(
        self,
        path: Path,
        *,
        lock_mode: LockMode = DEFAULT_LOCK_MODE,
        store: RegistryStore | None = None,
    ) -> None:
        self.path = path
        self.lock_mode = lock_mode
        self.store = store or build_store(lock_mode)
        self._registry: Registry | None = None
        self._committed = False
        self._stack = ExitStack()

    @property
    def registry(self) -> Registry:
        if self._registry is None:
            raise RuntimeError("Unit of work has not been entered")
        return self._registry

    @property
    def committed(self) -> bool:
        return self._committed

    def __enter__(self) -> RegistryFileUnitOfWork:
        with ExitStack() as stack:
            if self.lock_mode is LockMode.FLOCK:
                stack.enter_context(exclusive_file_lock(self.path))
            self._registry = self.store.load(self.path)
            self._stack = stack.pop_all()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self._stack.close()
        return False  # don't swallow exceptions

    def commit(self, registry: Registry) -> None:
        self.store.save(self.path, registry)
        self._registry = registry
        self._committed = True
