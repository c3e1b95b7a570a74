"""Process boundary for ``hg status`` captures.

``StatusCommand`` is the only code that spawns processes. The repository
handle and locator talk to it through ``is_available`` and ``capture`` so
tests can swap in an in-memory fixture.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .errors import NotARepository, ToolNotFound

logger = logging.getLogger(__name__)

HG_EXECUTABLE = "hg"
STATUS_ARGS = ("status", "--all")


class StatusSource(Protocol):
    def is_available(self) -> bool: ...

    def capture(self, root: Path) -> bytes: ...


def plain_environment(base: dict[str, str] | None = None) -> dict[str, str]:
    """Return an environment that makes ``hg`` output plain and locale-free."""
    env = dict(os.environ if base is None else base)
    env["HGPLAIN"] = "1"
    env.pop("HGPLAINEXCEPT", None)
    return env


@dataclass(frozen=True)
class StatusCommand:
    """Runs ``hg status --all`` with a root directory as working context."""

    executable: str = HG_EXECUTABLE
    timeout_seconds: float | None = None
    env: dict[str, str] = field(default_factory=plain_environment, repr=False, compare=False)

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def argv(self) -> list[str]:
        return [self.executable, *STATUS_ARGS]

    def capture(self, root: Path) -> bytes:
        """Return raw stdout bytes of one status invocation at ``root``.

        Raises ``ToolNotFound`` when the executable cannot be started and
        ``NotARepository`` when ``root`` is unusable or ``hg`` exits non-zero.
        """
        if not root.is_dir():
            raise NotARepository(f"Not a directory: {root}")
        try:
            proc = subprocess.run(
                self.argv(),
                cwd=str(root),
                env=self.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise ToolNotFound(f"Mercurial executable not found: {self.executable}") from exc
        except subprocess.TimeoutExpired as exc:
            raise NotARepository(f"hg status timed out after {self.timeout_seconds}s in {root}") from exc
        except OSError as exc:
            raise NotARepository(f"Could not run hg status in {root}: {exc}") from exc

        if proc.returncode != 0:
            raise NotARepository(f"hg status exited with {proc.returncode} in {root}")
        logger.debug("captured %d bytes of status output in %s", len(proc.stdout), root)
        return proc.stdout


__all__ = [
    "HG_EXECUTABLE",
    "STATUS_ARGS",
    "StatusCommand",
    "StatusSource",
    "plain_environment",
]
