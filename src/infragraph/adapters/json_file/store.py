"""JSON file implementation of the registry store."""

from __future__ import annotations

import hashlib
import json
import os
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from infragraph.domain.errors import (
    ConcurrentModificationError,
    InvalidRegistryFormatError,
    RegistryNotFoundError,
)
from infragraph.domain.model import Registry
from infragraph.domain.model.schema import summarize_validation_error

from .locking import exclusive_file_lock
from .schema import RegistryDocument

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


def fingerprint(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def render_registry(registry: Registry) -> str:
    return json.dumps(registry.to_document(), indent=2, ensure_ascii=False) + "\n"


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` to a sibling temp file, then rename it over ``path``."""

    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


class JsonRegistryStore:
    """Whole-file JSON store.

    With ``verify_unchanged`` the store remembers a fingerprint of every file it
    loads and refuses to save over a file whose content changed since
    (compare-and-swap). The check and the replace run under the sidecar
    ``flock`` so no cooperating writer can land between them. Without it, the
    last writer wins.
    """

    def __init__(self, *, verify_unchanged: bool = False) -> None:
        self.verify_unchanged = verify_unchanged
        self._fingerprints: dict[Path, str] = {}

    def load(self, path: Path) -> Registry:
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise RegistryNotFoundError(path) from exc
        except IsADirectoryError as exc:
            raise InvalidRegistryFormatError(path, "path is a directory") from exc

        self._fingerprints[path.resolve()] = fingerprint(raw)
        registry = parse_registry(path, raw)
        log.debug("Loaded %s entities from %s", len(registry), path)
        return registry

    def save(self, path: Path, registry: Registry) -> None:
        content = render_registry(registry)
        if self.verify_unchanged and path.resolve() in self._fingerprints:
            with exclusive_file_lock(path):
                self._check_unchanged(path)
                atomic_write_text(path, content)
        else:
            atomic_write_text(path, content)
        self._fingerprints[path.resolve()] = fingerprint(content.encode("utf-8"))
        log.debug("Saved %s entities to %s", len(registry), path)

    def create(self, path: Path, registry: Registry) -> bool:
        """Write ``registry`` to ``path`` only if no file exists there yet."""

        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("x", encoding="utf-8") as handle:
                handle.write(render_registry(registry))
        except FileExistsError:
            return False
        return True

    def _check_unchanged(self, path: Path) -> None:
        expected = self._fingerprints.get(path.resolve())
        if expected is None:
            return
        try:
            current = fingerprint(path.read_bytes())
        except FileNotFoundError:
            current = None
        if current != expected:
            raise ConcurrentModificationError(path)


def parse_registry(path: Path, raw: bytes) -> Registry:
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRegistryFormatError(path, f"not valid JSON ({exc})") from exc

    if not isinstance(document, dict):
        raise InvalidRegistryFormatError(path, "top level must be a JSON object")

    try:
        RegistryDocument.model_validate(document)
    except ValidationError as exc:
        raise InvalidRegistryFormatError(path, summarize_validation_error(exc)) from exc

    return Registry.from_document(document)
