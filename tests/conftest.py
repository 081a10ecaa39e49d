from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from infragraph.config import LOCK_MODE_ENV, REGISTRY_PATH_ENV
from tests.helpers.registry import base_document

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(REGISTRY_PATH_ENV, raising=False)
    monkeypatch.delenv(LOCK_MODE_ENV, raising=False)


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    path = tmp_path / "global-graph.json"
    path.write_text(json.dumps(base_document(), indent=2), encoding="utf-8")
    return path


@pytest.fixture
def empty_registry_path(tmp_path: Path) -> Path:
    path = tmp_path / "empty-graph.json"
    path.write_text(json.dumps({"entities": [], "last_updated": None}), encoding="utf-8")
    return path
