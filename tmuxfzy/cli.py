"""Command-line front door for tmux-fzy.

Without a subcommand the interactive picker starts. ``add``, ``list`` and
``del`` manage the search roots stored in the config file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .errors import TmuxFzyError, format_error_chain
from .runtime import run_app
from .runtime.config import LOG_PATH, add_roots, load_roots, remove_roots
from .ui_theme import available_theme_names, resolve_theme


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def configure_logging(verbose: bool) -> None:
    """Send debug logs to a file so they never draw over the picker."""
    if verbose:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=logging.DEBUG,
            filename=str(LOG_PATH),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmux-fzy",
        description="Fuzzy-pick a project directory and open it as a tmux session.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help=f"Write debug logs to {LOG_PATH}.",
    )
    commands = parser.add_subparsers(dest="command")

    add = commands.add_parser("add", help="Add directories as search roots.")
    add.add_argument("--mindepth", type=_nonnegative_int, default=0, help="Minimum search depth (default: 0).")
    add.add_argument("--maxdepth", type=_nonnegative_int, default=0, help="Maximum search depth (default: 0).")
    add.add_argument("paths", nargs="+", type=Path, metavar="PATH")

    commands.add_parser("list", help="List configured search roots.")

    delete = commands.add_parser("del", help="Remove search roots.")
    delete.add_argument("paths", nargs="+", type=Path, metavar="PATH")
    return parser


def list_roots(no_color: bool) -> None:
    theme = resolve_theme(None, no_color=no_color or not sys.stdout.isatty())
    for idx, root in enumerate(load_roots(), start=1):
        sys.stdout.write(
            f"{theme.active}{idx}:{theme.reset} {root.path}"
            f"{theme.selection}\tmin_depth:{theme.reset} {root.min_depth}"
            f"{theme.selection}, max_depth:{theme.reset} {root.max_depth}\n"
        )


def print_error(exc: BaseException) -> None:
    theme = resolve_theme(None, no_color=not sys.stderr.isatty())
    sys.stderr.write(f"{theme.active}{theme.bold}Error: {theme.reset}")
    sys.stderr.write("\n".join(format_error_chain(exc)) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the picker or a root command.

    ``TmuxFzyError`` failures are printed (with their causes) and turned
    into exit status 1.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "add":
            add_roots(args.paths, args.mindepth, args.maxdepth)
        elif args.command == "del":
            remove_roots(args.paths)
        elif args.command == "list":
            list_roots(args.no_color)
        else:
            run_app(theme_name=args.theme, no_color=args.no_color)
    except TmuxFzyError as exc:
        print_error(exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
