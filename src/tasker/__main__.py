"""CLI entry point for tasker."""

import argparse
import logging
from pathlib import Path

from .cli.commands import READ_ONLY_COMMANDS, BoardServices, add_command_parsers, run_command
from .cli.output import error
from .config import Settings
from .errors import TaskerError
from .logging import setup_logging
from .repositories.snapshot import load_store, save_store

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tasker",
        description="Project boards with ordered columns and tasks",
    )
    parser.add_argument(
        "--board-file",
        type=Path,
        default=None,
        help="YAML file holding the board (default: tasker.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    add_command_parsers(parser)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)

    # Build settings from CLI args; anything not given falls back to TASKER_* env vars
    settings_kwargs: dict = {}
    if args.board_file:
        settings_kwargs["board_file"] = args.board_file
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    try:
        store = load_store(settings.board_file)
        run_command(args, BoardServices.from_store(store))
        if args.command not in READ_ONLY_COMMANDS:
            save_store(store, settings.board_file)
    except TaskerError as e:
        error(str(e))
        return 1
    except OSError as e:
        logger.debug("Board file access failed", exc_info=True)
        error(f"Cannot access board file {settings.board_file}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
