"""CLI argument handling and exit-code tests.

Verifies how ``filinator.cli.main`` validates invocations, prepares the
output directory and maps run outcomes to exit codes.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filinator import cli
from filinator.errors import CopyWriteFailed


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.base = Path(tmp.name).resolve()
        patches = [
            mock.patch("filinator.config.CONFIG_PATH", self.base / "config" / "config.json"),
            mock.patch("sys.stdout", io.StringIO()),
            mock.patch("sys.stderr", io.StringIO()),
        ]
        started = [patch.start() for patch in patches]
        for patch in patches:
            self.addCleanup(patch.stop)
        self.stdout = started[1]
        self.stderr = started[2]


class CliUsageTests(CliTestCase):
    def test_no_arguments_is_a_usage_error(self) -> None:
        self.assertEqual(cli.main([]), 1)
        self.assertIn("usage:", self.stderr.getvalue())

    def test_unknown_option_is_a_usage_error(self) -> None:
        self.assertEqual(cli.main(["-frobnicate", str(self.base)]), 1)

    def test_encode_and_decode_are_mutually_exclusive(self) -> None:
        self.assertEqual(cli.main(["-encode", str(self.base), "-decode", str(self.base)]), 1)

    def test_decode_rejects_output_option(self) -> None:
        self.assertEqual(cli.main(["-decode", str(self.base), "-output", "out"]), 1)
        self.assertIn("-output is only accepted with -encode", self.stderr.getvalue())

    def test_missing_root_exits_with_error(self) -> None:
        self.assertEqual(cli.main(["-decode", str(self.base / "missing")]), 1)
        self.assertIn("not a directory", self.stderr.getvalue())


class CliEncodeTests(CliTestCase):
    def _make_project(self) -> Path:
        project = self.base / "project"
        (project / "notes").mkdir(parents=True)
        (project / "notes" / "todo list.md").write_text("ship it\n", encoding="utf-8")
        return project

    def test_encode_into_explicit_output_directory(self) -> None:
        project = self._make_project()
        out = self.base / "encoded"

        self.assertEqual(cli.main(["-encode", str(project), "-output", str(out)]), 0)

        names = os.listdir(out)
        self.assertEqual(len(names), 1)
        self.assertTrue(names[0].endswith("@project@notes@todo_list.md"))
        self.assertIn("Copied:", self.stdout.getvalue())

    def test_encode_creates_default_output_directory(self) -> None:
        project = self._make_project()
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.base)
            self.assertEqual(cli.main(["-encode", str(project)]), 0)
        finally:
            os.chdir(previous_cwd)

        self.assertEqual(len(os.listdir(self.base / "output")), 1)
        self.assertIn("Default output directory 'output' created", self.stdout.getvalue())

    def test_output_path_that_is_a_file_is_rejected(self) -> None:
        project = self._make_project()
        blocker = self.base / "blocker"
        blocker.write_text("", encoding="utf-8")

        self.assertEqual(cli.main(["-encode", str(project), "-output", str(blocker)]), 1)
        self.assertIn("exists but is not a directory", self.stderr.getvalue())

    def test_per_entry_failures_still_exit_zero(self) -> None:
        project = self._make_project()
        out = self.base / "encoded"
        failure = CopyWriteFailed("disk full", path=out)

        with mock.patch("filinator.walker.copy_file", side_effect=failure):
            self.assertEqual(cli.main(["-encode", str(project), "-output", str(out)]), 0)

        self.assertIn("1 entries failed during encode", self.stderr.getvalue())


class CliDecodeTests(CliTestCase):
    def test_decode_restores_names_in_place(self) -> None:
        root = self.base / "incoming"
        root.mkdir()
        (root / "@backup@my_docs@plan.txt").write_text("plan\n", encoding="utf-8")

        self.assertEqual(cli.main(["-decode", str(root)]), 0)

        restored = root / "backup" / "my docs" / "plan.txt"
        self.assertEqual(restored.read_text(encoding="utf-8"), "plan\n")

    def test_unreadable_root_exits_with_error(self) -> None:
        root = self.base / "incoming"
        root.mkdir()

        with mock.patch("filinator.walker.os.scandir", side_effect=PermissionError(13, "Permission denied")):
            self.assertEqual(cli.main(["-decode", str(root)]), 1)


if __name__ == "__main__":
    unittest.main()
