"""Public package surface for hgstatus.

Parses ``hg status --all`` captures into typed snapshots and answers
per-path status and dirtiness queries for a repository root.
"""

from __future__ import annotations

from .command import StatusCommand, StatusSource
from .errors import (
    DecodeError,
    MercurialError,
    NotARepository,
    PathOutsideRepository,
    ToolNotFound,
    UnknownStatusCode,
)
from .locate import DEFAULT_MAX_DEPTH, find_parent_repository, is_mercurial_repository
from .repository import MercurialRepository
from .snapshot import StatusSnapshot
from .status import StatusCode, TrackedEntry, parse_status_line


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DecodeError",
    "MercurialError",
    "MercurialRepository",
    "NotARepository",
    "PathOutsideRepository",
    "StatusCode",
    "StatusCommand",
    "StatusSnapshot",
    "StatusSource",
    "ToolNotFound",
    "TrackedEntry",
    "UnknownStatusCode",
    "find_parent_repository",
    "is_mercurial_repository",
    "main",
    "parse_status_line",
]
