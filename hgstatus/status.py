"""Status codes, tracked entries, and the ``hg status`` line parser.

Each status line is ``<code-char><space><relative-path>``. The path is taken
verbatim; it is already relative to the root because the capture runs there.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath

from .errors import UnknownStatusCode

STATUS_PREFIX_WIDTH = 2


class StatusCode(Enum):
    """Closed set of per-path states.

    Values are the single-character codes ``hg status`` prints. ``DIRECTORY``
    is never parsed; it is synthesized when a queried path is a directory.
    """

    MODIFIED = "M"
    ADDED = "A"
    REMOVED = "R"
    CLEAN = "C"
    MISSING = "!"
    NOT_TRACKED = "?"
    IGNORED = "I"
    DIRECTORY = "/"

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


DEFAULT_STATUS = StatusCode.NOT_TRACKED

_CODE_TO_STATUS: dict[str, StatusCode] = {
    status.value: status for status in StatusCode if status is not StatusCode.DIRECTORY
}


@dataclass(frozen=True)
class TrackedEntry:
    """One parsed status row.

    ``copy_source`` is filled when ``hg status`` reports the origin of a
    copied or renamed file on the following line. Equality and hashing use
    ``path`` only.
    """

    path: PurePath
    status: StatusCode = field(compare=False)
    copy_source: PurePath | None = field(default=None, compare=False)


def parse_status_code(code: str, line: str = "") -> StatusCode:
    status = _CODE_TO_STATUS.get(code)
    if status is None:
        raise UnknownStatusCode(line or code)
    return status


def parse_status_line(line: str) -> TrackedEntry:
    """Parse one non-empty status line into a ``TrackedEntry``.

    Raises ``UnknownStatusCode`` for an unrecognized leading character or a
    line too short to carry a path.
    """
    status = parse_status_code(line[:1], line)
    if len(line) <= STATUS_PREFIX_WIDTH or line[1] != " ":
        raise UnknownStatusCode(line, f"Malformed status line {line!r}")
    return TrackedEntry(path=PurePath(line[STATUS_PREFIX_WIDTH:]), status=status)


__all__ = [
    "DEFAULT_STATUS",
    "STATUS_PREFIX_WIDTH",
    "StatusCode",
    "TrackedEntry",
    "parse_status_code",
    "parse_status_line",
]
