"""CLI behavior tests.

Verifies how ``hgstatus.cli.main`` locates the repository and formats output.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hgstatus import cli


class _FakeStatusSource:
    def __init__(self, capture: bytes, available: bool = True) -> None:
        self._capture = capture
        self._available = available

    def is_available(self) -> bool:
        return self._available

    def capture(self, root: Path) -> bytes:
        return self._capture


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / ".hg").mkdir()
        (self.root / "src").mkdir()
        (self.root / "src" / "main.py").write_text("x\n", encoding="utf-8")
        self.config_path = self.root / "config.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv: list[str], capture: bytes) -> tuple[int, str]:
        stdout = io.StringIO()
        with mock.patch("hgstatus.config.CONFIG_PATH", self.config_path), mock.patch(
            "hgstatus.cli.config.build_status_command",
            return_value=_FakeStatusSource(capture),
        ), mock.patch("sys.stdout", stdout):
            code = cli.main(argv)
        return code, stdout.getvalue()

    def test_prints_code_per_path(self) -> None:
        main_py = self.root / "src" / "main.py"
        code, out = self._run([str(main_py), str(self.root / "src"), str(self.root / "new.txt")], b"M src/main.py\n")

        self.assertEqual(code, 0)
        self.assertEqual(
            out.splitlines(),
            [f"M {main_py}", f"/ {self.root / 'src'}", f"? {self.root / 'new.txt'}"],
        )

    def test_defaults_to_given_default_path(self) -> None:
        stdout = io.StringIO()
        with mock.patch("hgstatus.config.CONFIG_PATH", self.config_path), mock.patch(
            "hgstatus.cli.config.build_status_command",
            return_value=_FakeStatusSource(b""),
        ), mock.patch("sys.stdout", stdout):
            code = cli.main([], default_path=self.root / "src")

        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue().splitlines(), [f"/ {self.root / 'src'}"])

    def test_dirty_flag_sets_exit_status(self) -> None:
        code, out = self._run(["--dirty", str(self.root)], b"C src/main.py\n")
        self.assertEqual((code, out.strip()), (0, "clean"))

        code, out = self._run(["--dirty", str(self.root)], b"! src/main.py\n")
        self.assertEqual((code, out.strip()), (1, "dirty"))

    def test_raw_and_summary_modes(self) -> None:
        capture = b"M a\nM b\n? c\n"
        _code, raw = self._run(["--raw", str(self.root)], capture)
        self.assertEqual(raw, capture.decode("utf-8"))

        _code, summary = self._run(["--summary", str(self.root)], capture)
        self.assertEqual(summary.splitlines(), ["modified: 2", "not tracked: 1"])

    def test_exits_with_install_message_when_hg_missing(self) -> None:
        with mock.patch("hgstatus.config.CONFIG_PATH", self.config_path), mock.patch(
            "hgstatus.cli.config.build_status_command",
            return_value=_FakeStatusSource(b"", available=False),
        ), mock.patch("hgstatus.cli.find_parent_repository") as find_parent:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.root)])

        self.assertEqual(str(ctx.exception), "Mercurial is not installed")
        find_parent.assert_not_called()

    def test_exits_when_no_repository_found(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run(["--max-depth", "1", str(self.root / "src")], b"")
        self.assertIn("No Mercurial repository", str(ctx.exception))

    def test_exits_on_path_outside_repository(self) -> None:
        outside = self.root.parent
        with self.assertRaises(SystemExit) as ctx:
            self._run([str(self.root), str(outside)], b"")
        self.assertIn("outside repository", str(ctx.exception))

    def test_rejects_negative_max_depth(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main(["--max-depth", "-1"])


if __name__ == "__main__":
    unittest.main()
