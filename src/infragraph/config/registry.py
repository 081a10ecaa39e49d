"""Registry location and write-coordination settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

REGISTRY_PATH_ENV: Final[str] = "INFRAGRAPH_REGISTRY_PATH"
LOCK_MODE_ENV: Final[str] = "INFRAGRAPH_LOCK_MODE"
REGISTRY_RELATIVE_PATH: Final[Path] = Path(".claude") / "forge" / "registry" / "global-graph.json"


class LockMode(StrEnum):
    """How concurrent writers of one registry file are kept apart."""

    NONE = "none"
    FLOCK = "flock"
    CAS = "cas"


DEFAULT_LOCK_MODE: Final[LockMode] = LockMode.CAS


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    path: Path
    lock_mode: LockMode = DEFAULT_LOCK_MODE

    def resolve_path(self) -> Path:
        return self.path.expanduser().resolve()


def default_registry_path() -> Path:
    return Path.home() / REGISTRY_RELATIVE_PATH


def parse_lock_mode(value: str) -> LockMode:
    try:
        return LockMode(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in LockMode)
        raise ConfigurationError(
            f"Invalid {LOCK_MODE_ENV}={value!r}; expected one of: {choices}"
        ) from exc


def get_registry_config(
    *,
    path: Path | None = None,
    lock_mode: LockMode | None = None,
) -> RegistryConfig:
    """Build the registry config; explicit arguments win over the environment."""

    env_path = optional_env_var(REGISTRY_PATH_ENV)
    effective_path = path or (Path(env_path) if env_path else default_registry_path())

    effective_mode = lock_mode
    if effective_mode is None:
        env_mode = optional_env_var(LOCK_MODE_ENV)
        effective_mode = parse_lock_mode(env_mode) if env_mode else DEFAULT_LOCK_MODE

    return RegistryConfig(path=effective_path, lock_mode=effective_mode)
