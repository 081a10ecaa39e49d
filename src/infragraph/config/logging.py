"""Shared logging helpers."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract. The
    default level is WARNING because the CLI prints its own confirmations;
    ``--verbose`` lowers it. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
