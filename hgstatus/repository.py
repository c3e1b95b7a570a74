"""Repository handle: a fixed root plus its current status snapshot.

The snapshot is replaced wholesale on ``refresh`` so it always reflects a
single ``hg status`` invocation. Handles carry no internal locking; callers
sharing one across threads must serialize access themselves.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath

from .command import StatusCommand, StatusSource
from .errors import NotARepository, PathOutsideRepository, ToolNotFound
from .snapshot import StatusSnapshot
from .status import DEFAULT_STATUS, StatusCode, TrackedEntry

logger = logging.getLogger(__name__)

REPOSITORY_MARKER = ".hg"


def is_mercurial_repository(path: Path) -> bool:
    """Return whether ``path`` is a directory holding a ``.hg`` directory."""
    return path.is_dir() and (path / REPOSITORY_MARKER).is_dir()


def _relative_to(path: Path, root: Path) -> PurePath | None:
    try:
        return path.relative_to(root)
    except ValueError:
        return None


class MercurialRepository:
    def __init__(self, root: Path, snapshot: StatusSnapshot, command: StatusSource) -> None:
        self._root = root
        self._snapshot = snapshot
        self._command = command

    @classmethod
    def open(cls, root: Path | str, command: StatusSource | None = None) -> MercurialRepository:
        """Capture the initial snapshot for ``root``.

        ``root`` must hold the ``.hg`` marker; ``hg`` also runs happily in a
        subdirectory but prints paths relative to the real root.

        Raises ``ToolNotFound``, ``NotARepository``, ``DecodeError`` or
        ``UnknownStatusCode``.
        """
        command = command if command is not None else StatusCommand()
        resolved_root = Path(root).resolve()
        snapshot = cls._capture(resolved_root, command)
        logger.debug("opened %s with %d entries", resolved_root, len(snapshot))
        return cls(resolved_root, snapshot, command)

    @staticmethod
    def _capture(root: Path, command: StatusSource) -> StatusSnapshot:
        if not command.is_available():
            raise ToolNotFound()
        if not is_mercurial_repository(root):
            raise NotARepository(f"No {REPOSITORY_MARKER} directory in {root}")
        return StatusSnapshot.from_capture(command.capture(root))

    @property
    def root(self) -> Path:
        return self._root

    @property
    def snapshot(self) -> StatusSnapshot:
        return self._snapshot

    @property
    def entries(self) -> tuple[TrackedEntry, ...]:
        return self._snapshot.entries

    @property
    def raw_lines(self) -> tuple[str, ...]:
        return self._snapshot.raw_lines

    def refresh(self) -> None:
        """Re-run ``hg status`` and swap in the new snapshot.

        Tool presence is re-checked on every call. On failure the previous
        snapshot stays in place.
        """
        self._snapshot = self._capture(self._root, self._command)
        logger.debug("refreshed %s with %d entries", self._root, len(self._snapshot))

    def resolve(self, path: Path | str) -> tuple[Path, PurePath]:
        """Return ``(absolute_path, path_relative_to_root)`` for ``path``.

        Relative paths are taken relative to the root. ``..`` segments are
        collapsed lexically; a path that escapes the root raises
        ``PathOutsideRepository``.
        """
        candidate = Path(os.path.normpath(self._root / path))
        relative = _relative_to(candidate, self._root)
        if relative is None and candidate.parent != candidate:
            # Absolute inputs may reach the root through a symlinked prefix.
            try:
                candidate = candidate.parent.resolve() / candidate.name
            except (OSError, RuntimeError):
                raise PathOutsideRepository(Path(path), self._root) from None
            relative = _relative_to(candidate, self._root)
        if relative is None:
            raise PathOutsideRepository(Path(path), self._root)
        return candidate, relative

    def status_of(self, path: Path | str) -> StatusCode:
        """Return the status of ``path``.

        Directories always report ``DIRECTORY``. Paths absent from the
        snapshot report ``NOT_TRACKED``.
        """
        target, relative = self.resolve(path)
        if target.is_dir():
            logger.debug("%s is a directory", relative)
            return StatusCode.DIRECTORY
        status = self._snapshot.status_of(relative)
        return status if status is not None else DEFAULT_STATUS

    def is_dirty(self) -> bool:
        return self._snapshot.is_dirty()

    def __repr__(self) -> str:
        return f"MercurialRepository(root={self._root!r}, entries={len(self._snapshot)})"


__all__ = ["MercurialRepository", "REPOSITORY_MARKER", "is_mercurial_repository"]
