"""Nearest-enclosing repository search.

Walks lexical ancestors of a start path, bounded by an explicit depth budget.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .command import StatusSource
from .errors import MercurialError
from .repository import REPOSITORY_MARKER, MercurialRepository, is_mercurial_repository

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def iter_ancestors(start: Path, max_depth: int) -> Iterator[Path]:
    """Yield ``start`` and its parents, at most ``max_depth`` paths."""
    current = Path(os.path.abspath(start))
    remaining = max_depth
    while remaining > 0:
        yield current
        remaining -= 1
        parent = current.parent
        if parent == current:
            return
        current = parent


def find_parent_repository(
    start: Path | str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    command: StatusSource | None = None,
) -> MercurialRepository | None:
    """Open the nearest repository at or above ``start``.

    Each checked path costs one unit of ``max_depth``. A marked directory
    that fails to open is skipped and the search continues upward.
    """
    for candidate in iter_ancestors(Path(start), max_depth):
        if not is_mercurial_repository(candidate):
            continue
        try:
            return MercurialRepository.open(candidate, command=command)
        except MercurialError as exc:
            logger.debug("skipping %s: %s", candidate, exc)
    return None


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "REPOSITORY_MARKER",
    "find_parent_repository",
    "is_mercurial_repository",
    "iter_ancestors",
]
