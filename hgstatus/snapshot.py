"""Immutable snapshot of one ``hg status --all`` capture."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePath

from .errors import DecodeError, UnknownStatusCode
from .status import StatusCode, TrackedEntry, parse_status_line

COPY_SOURCE_PREFIX = "  "


def _attach_copy_source(entries: list[TrackedEntry], line: str) -> None:
    """Record a copy-origin line on the entry printed just before it."""
    if not entries:
        raise UnknownStatusCode(line, f"Copy source without a preceding entry: {line!r}")
    previous = entries[-1]
    entries[-1] = TrackedEntry(
        path=previous.path,
        status=previous.status,
        copy_source=PurePath(line[len(COPY_SOURCE_PREFIX):]),
    )


def parse_status_lines(lines: list[str]) -> tuple[TrackedEntry, ...]:
    entries: list[TrackedEntry] = []
    for line in lines:
        if not line:
            continue
        if line.startswith(COPY_SOURCE_PREFIX):
            _attach_copy_source(entries, line)
            continue
        entries.append(parse_status_line(line))
    return tuple(entries)


@dataclass(frozen=True)
class StatusSnapshot:
    """Ordered tracked entries plus the raw lines they were parsed from.

    Duplicate paths are tolerated; lookups return the first match.
    """

    entries: tuple[TrackedEntry, ...] = ()
    raw_lines: tuple[str, ...] = ()
    _index: dict[PurePath, TrackedEntry] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for entry in self.entries:
            self._index.setdefault(entry.path, entry)

    @classmethod
    def from_text(cls, text: str) -> StatusSnapshot:
        raw_lines = tuple(text.split("\n"))
        return cls(entries=parse_status_lines(list(raw_lines)), raw_lines=raw_lines)

    @classmethod
    def from_capture(cls, raw: bytes) -> StatusSnapshot:
        """Decode a raw capture as UTF-8 and parse it.

        Raises ``DecodeError`` when the bytes are not valid text.
        """
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Status output is not valid UTF-8: {exc}") from exc
        return cls.from_text(text)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[TrackedEntry]:
        return iter(self.entries)

    def get(self, path: PurePath | str) -> TrackedEntry | None:
        """Return the first entry recorded for ``path`` relative to the root."""
        return self._index.get(PurePath(path))

    def status_of(self, path: PurePath | str) -> StatusCode | None:
        entry = self.get(path)
        return entry.status if entry is not None else None

    def is_dirty(self) -> bool:
        return any(entry.status is not StatusCode.CLEAN for entry in self.entries)

    def paths_with_status(self, *statuses: StatusCode) -> list[PurePath]:
        wanted = set(statuses)
        return [entry.path for entry in self.entries if entry.status in wanted]

    def counts(self) -> dict[StatusCode, int]:
        """Return per-status totals in ``StatusCode`` declaration order."""
        totals = {status: 0 for status in StatusCode if status is not StatusCode.DIRECTORY}
        for entry in self.entries:
            totals[entry.status] += 1
        return totals


__all__ = [
    "COPY_SOURCE_PREFIX",
    "StatusSnapshot",
    "parse_status_lines",
]
