"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .registry import (
    DEFAULT_LOCK_MODE,
    LOCK_MODE_ENV,
    REGISTRY_PATH_ENV,
    LockMode,
    RegistryConfig,
    default_registry_path,
    get_registry_config,
    parse_lock_mode,
)

__all__ = [
    "DEFAULT_LOCK_MODE",
    "LOCK_MODE_ENV",
    "REGISTRY_PATH_ENV",
    "ConfigurationError",
    "LockMode",
    "RegistryConfig",
    "configure_logging",
    "default_registry_path",
    "get_registry_config",
    "optional_env_var",
    "parse_lock_mode",
]
