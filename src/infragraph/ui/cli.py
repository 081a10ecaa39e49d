# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, NoReturn

from dotenv import load_dotenv

from infragraph.app import init_registry, merge_entity, seed_global_graph
from infragraph.config import (
    ConfigurationError,
    configure_logging,
    get_registry_config,
    parse_lock_mode,
)
from infragraph.domain.errors import RegistryError, RegistryNotFoundError, UsageError
from infragraph.domain.merge import Conflict, MergeStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from infragraph.config import RegistryConfig
    from infragraph.domain.model import Entity

log = logging.getLogger(__name__)

PREFIX = "[infragraph]"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFLICT = 2


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage problems as ``UsageError``."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{message}\n{self.format_usage().rstrip()}")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = _ArgumentParser(prog="infragraph", description="Maintain the global entity registry")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--lock-mode",
        type=str,
        help="Write coordination: none, flock or cas (defaults to config)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    merge = subparsers.add_parser(
        "merge",
        help="Merge one harvested entity, failing on conflicting metadata",
    )
    merge.add_argument("registry", type=Path, help="Path to the registry JSON file")
    merge.add_argument("entity", type=str, help="Candidate entity as a JSON object")

    seed = subparsers.add_parser("seed", help="Seed the registry with shared infrastructure")
    seed.add_argument(
        "registry",
        type=Path,
        nargs="?",
        help="Path to the registry JSON file (defaults to config)",
    )

    init = subparsers.add_parser("init", help="Create an empty registry if none exists")
    init.add_argument(
        "registry",
        type=Path,
        nargs="?",
        help="Path to the registry JSON file (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:  # noqa: PLR2004
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def _build_config(args: argparse.Namespace) -> RegistryConfig:
    lock_mode = parse_lock_mode(args.lock_mode) if args.lock_mode else None
    return get_registry_config(path=args.registry, lock_mode=lock_mode)


def _error(message: str) -> None:
    print(f"{PREFIX} ERROR: {message}", file=sys.stderr)


def _render(entity: Entity) -> str:
    return json.dumps(entity, indent=2, ensure_ascii=False)


def _report_conflict(conflict: Conflict) -> None:
    print(
        f'{PREFIX} CONFLICT: entity "{conflict.entity_id}" exists with different metadata.',
        file=sys.stderr,
    )
    print(f"{PREFIX} Existing:\n{_render(conflict.existing)}", file=sys.stderr)
    print(f"{PREFIX} Candidate:\n{_render(conflict.candidate)}", file=sys.stderr)
    print(
        f"{PREFIX} Registry NOT modified. Resolve conflict and re-run, or accept existing.",
        file=sys.stderr,
    )


def _run_merge(args: argparse.Namespace, config: RegistryConfig) -> int:
    outcome = merge_entity(args.entity, config=config)
    if isinstance(outcome, Conflict):
        _report_conflict(outcome)
        return EXIT_CONFLICT
    if outcome.status is MergeStatus.APPENDED:
        print(f"{PREFIX} Appended new entity: {outcome.entity_id}")
    else:
        print(f"{PREFIX} Skip (already current): {outcome.entity_id}")
    return EXIT_OK


def _run_seed(config: RegistryConfig) -> int:
    try:
        result = seed_global_graph(config=config)
    except RegistryNotFoundError:
        print(f"{PREFIX} Run `infragraph init` first.", file=sys.stderr)
        raise
    print(f"{PREFIX} Global graph seeded: {result.total} total entities ({result.infra} infra)")
    print(f"{PREFIX} Registry: {config.path}")
    return EXIT_OK


def _run_init(config: RegistryConfig) -> int:
    path, created = init_registry(config=config)
    if created:
        print(f"{PREFIX} Created empty registry: {path}")
    else:
        print(f"{PREFIX} Registry already exists, left untouched: {path}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point; returns the process exit status."""

    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=_log_level(parsed_args.verbose))
        config = _build_config(parsed_args)
    except (UsageError, ConfigurationError) as exc:
        _error(str(exc))
        return EXIT_ERROR

    try:
        if parsed_args.command == "merge":
            return _run_merge(parsed_args, config)
        if parsed_args.command == "seed":
            return _run_seed(config)
        if parsed_args.command == "init":
            return _run_init(config)
        raise UsageError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (RegistryError, ConfigurationError) as exc:
        _error(str(exc))
        return EXIT_ERROR
    except Exception:
        log.exception("Fatal error while updating the registry")
        return EXIT_ERROR


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C); nothing has been written unless a commit finished."""
    log.warning("Interrupted by user (Ctrl+C)")
    sys.exit(EXIT_ERROR)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    sys.exit(main())


if __name__ == "__main__":
    run()
