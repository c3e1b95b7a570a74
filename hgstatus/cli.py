"""Command-line front door for hgstatus.

Locates the enclosing repository, captures its status once, and prints
per-path codes, the raw capture, per-status counts, or a dirty flag.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .errors import MercurialError, ToolNotFound
from .locate import find_parent_repository
from .repository import MercurialRepository


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def format_status_rows(repo: MercurialRepository, paths: list[Path]) -> list[str]:
    rows: list[str] = []
    for path in paths:
        status = repo.status_of(path.absolute())
        rows.append(f"{status.value} {path}")
    return rows


def format_summary(repo: MercurialRepository) -> list[str]:
    return [
        f"{status.label}: {count}"
        for status, count in repo.snapshot.counts().items()
        if count
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hgstatus",
        description="Show Mercurial working-directory status for paths.",
    )
    parser.add_argument("paths", nargs="*", help="Paths to query. Defaults to the current directory.")
    parser.add_argument(
        "--max-depth",
        type=_nonnegative_int,
        default=None,
        help="How many directories to check while searching upward for the repository root.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dirty", action="store_true", help="Print dirty/clean; exit 1 when dirty.")
    mode.add_argument("--raw", action="store_true", help="Print the raw hg status capture.")
    mode.add_argument("--summary", action="store_true", help="Print per-status counts.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> int:
    """Parse arguments, query the enclosing repository, and print results.

    Returns the process exit status; ``--dirty`` returns 1 for a dirty tree.
    Raises ``SystemExit`` with a message when no repository is found or a
    query fails.
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if default_path is None:
        default_path = Path.cwd()
    paths = [Path(raw) for raw in args.paths] or [default_path]
    start = paths[0]
    if not start.exists():
        raise SystemExit(f"Path not found: {start}")

    max_depth = args.max_depth if args.max_depth is not None else config.load_max_depth()
    command = config.build_status_command()
    if not command.is_available():
        raise SystemExit(ToolNotFound().message)
    repo = find_parent_repository(start, max_depth, command=command)
    if repo is None:
        raise SystemExit(f"No Mercurial repository found at or above {start}")

    try:
        if args.dirty:
            dirty = repo.is_dirty()
            print("dirty" if dirty else "clean")
            return 1 if dirty else 0
        if args.raw:
            sys.stdout.write("\n".join(repo.raw_lines))
            return 0
        if args.summary:
            lines = format_summary(repo)
        else:
            lines = format_status_rows(repo, paths)
    except MercurialError as exc:
        raise SystemExit(str(exc)) from exc

    for line in lines:
        print(line)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
