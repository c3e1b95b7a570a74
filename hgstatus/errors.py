"""Error hierarchy for Mercurial status capture and queries.

Every failure is raised to the immediate caller. Only the repository locator
treats ``MercurialError`` as a signal to keep ascending.
"""

from __future__ import annotations

from pathlib import Path


class MercurialError(Exception):
    """Base class for all status-capture and query failures."""

    default_message = "Mercurial error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ToolNotFound(MercurialError):
    default_message = "Mercurial is not installed"


class NotARepository(MercurialError):
    default_message = "Not a Mercurial repository"


class DecodeError(MercurialError):
    default_message = "Error getting file status"


class UnknownStatusCode(MercurialError):
    """A status line starts with a character outside the known code set."""

    def __init__(self, line: str, message: str | None = None) -> None:
        self.line = line
        self.code = line[:1]
        super().__init__(message or f"Unknown status code {self.code!r} in line {line!r}")


class PathOutsideRepository(MercurialError):
    """A queried path does not lie under the repository root."""

    def __init__(self, path: Path, root: Path) -> None:
        self.path = path
        self.root = root
        super().__init__(f"{path} is outside repository {root}")


__all__ = [
    "MercurialError",
    "ToolNotFound",
    "NotARepository",
    "DecodeError",
    "UnknownStatusCode",
    "PathOutsideRepository",
]
