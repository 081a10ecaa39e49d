"""Advisory locking for the registry file."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from infragraph.domain.errors import DependencyMissingError, RegistryNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = getLogger(__name__)


def lock_path_for(path: Path) -> Path:
    return path.with_name(f"{path.name}.lock")


@contextmanager
def exclusive_file_lock(path: Path) -> Iterator[Path]:
    """Hold an exclusive ``flock`` on the sidecar lock file of ``path``.

    Blocks until the lock is available. Only cooperating processes using the
    same lock file are excluded. The registry itself must exist; no sidecar is
    created for a missing one.
    """

    try:
        import fcntl  # noqa: PLC0415
    except ImportError as exc:
        raise DependencyMissingError(
            "registry locking requires fcntl, which this platform does not provide; "
            "use lock mode 'none'"
        ) from exc

    if not path.exists():
        raise RegistryNotFoundError(path)

    lock_path = lock_path_for(path)
    try:
        handle = lock_path.open("a")
    except FileNotFoundError as exc:
        raise RegistryNotFoundError(path) from exc

    with handle:
        log.debug("Waiting for lock %s", lock_path)
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield lock_path
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
