"""CLI argument and dispatch behavior tests.

Verifies how ``dirtable.cli.main`` picks the starting directory, forwards
theme options, and chooses between the browser and the recursive export.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirtable import cli
from dirtable.errors import EXIT_DIRECTORY_LISTING, EXIT_TERMINAL_QUERY


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._previous_cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        patcher = mock.patch("dirtable.cli.configure_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        os.chdir(self._previous_cwd)
        self._tmp.cleanup()


class CliArgumentTests(CliTestCase):
    def test_defaults(self) -> None:
        args = cli.parse_args([])
        self.assertIsNone(args.path)
        self.assertIsNone(args.theme)
        self.assertFalse(args.no_color)
        self.assertFalse(args.nopager)
        self.assertFalse(args.debug)
        self.assertIsNone(args.log_file)

    def test_non_directory_path_exits(self) -> None:
        target = self.root / "file.txt"
        target.write_text("", encoding="utf-8")
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(target)])
        self.assertIn("Not a directory", str(ctx.exception.code))


class CliInteractiveTests(CliTestCase):
    def test_main_changes_into_path_and_starts_browser(self) -> None:
        with mock.patch("dirtable.cli._stdout_is_terminal", return_value=True), mock.patch(
            "dirtable.cli.run_browser", return_value=0
        ) as browser_mock, mock.patch("dirtable.cli.load_theme_name", return_value=None), mock.patch(
            "dirtable.cli.load_no_color", return_value=False
        ):
            cli.main([str(self.root), "--theme", "ocean"])

        browser_mock.assert_called_once_with("ocean", False)
        self.assertEqual(Path(os.getcwd()), self.root)

    def test_config_supplies_theme_and_color_defaults(self) -> None:
        os.chdir(self.root)
        with mock.patch("dirtable.cli._stdout_is_terminal", return_value=True), mock.patch(
            "dirtable.cli.run_browser", return_value=0
        ) as browser_mock, mock.patch("dirtable.cli.load_theme_name", return_value="ocean"), mock.patch(
            "dirtable.cli.load_no_color", return_value=True
        ):
            cli.main([])

        browser_mock.assert_called_once_with("ocean", True)

    def test_fatal_exit_code_is_propagated(self) -> None:
        with mock.patch("dirtable.cli._stdout_is_terminal", return_value=True), mock.patch(
            "dirtable.cli.run_browser", return_value=EXIT_TERMINAL_QUERY
        ), mock.patch("dirtable.cli.load_theme_name", return_value=None), mock.patch(
            "dirtable.cli.load_no_color", return_value=False
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.root)])
        self.assertEqual(ctx.exception.code, EXIT_TERMINAL_QUERY)


def _strict_stdout() -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(), encoding="utf-8", errors="strict")


class CliExportTests(CliTestCase):
    def _export_lines(self) -> list[str]:
        stdout = _strict_stdout()
        with mock.patch("dirtable.cli.sys.stdout", stdout), mock.patch("dirtable.cli.run_browser") as browser_mock:
            cli.main([str(self.root), "--nopager"])
        browser_mock.assert_not_called()
        return stdout.buffer.getvalue().decode("utf-8").splitlines()

    def test_nopager_writes_recursive_listing(self) -> None:
        (self.root / "a.txt").write_text("", encoding="utf-8")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "inner.txt").write_text("", encoding="utf-8")

        lines = self._export_lines()

        self.assertEqual(lines[0], str(self.root))
        self.assertTrue(lines[1].startswith("name"))
        self.assertTrue(lines[2].startswith("a.txt"))
        self.assertTrue(lines[3].startswith("inner.txt"))

    def test_undecodable_name_does_not_abort_listing(self) -> None:
        try:
            with open(os.path.join(os.fsencode(self.root), b"bad\xffname"), "wb"):
                pass
        except OSError:
            self.skipTest("filesystem rejects non-UTF-8 names")
        (self.root / "good.txt").write_text("", encoding="utf-8")

        lines = self._export_lines()

        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[2].startswith("bad?name"))
        self.assertTrue(lines[3].startswith("good.txt"))

    def test_non_terminal_output_selects_export(self) -> None:
        os.chdir(self.root)
        with mock.patch("dirtable.cli._stdout_is_terminal", return_value=False), mock.patch(
            "dirtable.cli.run_export", return_value=0
        ) as export_mock, mock.patch("dirtable.cli.run_browser") as browser_mock:
            cli.main([])
        export_mock.assert_called_once_with()
        browser_mock.assert_not_called()

    def test_unlistable_root_returns_listing_exit_code(self) -> None:
        missing = self.root / "missing"
        with mock.patch("dirtable.cli.resolve_working_directory", return_value=missing), mock.patch(
            "dirtable.cli.sys.stdout", _strict_stdout()
        ), self.assertLogs("dirtable", level="ERROR"):
            self.assertEqual(cli.run_export(), EXIT_DIRECTORY_LISTING)


class LoggingSetupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.package_logger = logging.getLogger("dirtable")
        saved_handlers = list(self.package_logger.handlers)
        saved_level = self.package_logger.level

        def restore() -> None:
            for handler in list(self.package_logger.handlers):
                self.package_logger.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                self.package_logger.addHandler(handler)
            self.package_logger.setLevel(saved_level)

        self.addCleanup(restore)

    def test_repeated_setup_replaces_handlers(self) -> None:
        cli.configure_logging(False, None, interactive=False)
        cli.configure_logging(True, None, interactive=False)

        kinds = sorted(type(handler).__name__ for handler in self.package_logger.handlers)
        self.assertEqual(kinds, ["NullHandler", "StreamHandler"])
        self.assertEqual(self.package_logger.level, logging.DEBUG)

    def test_interactive_setup_has_no_stderr_handler(self) -> None:
        cli.configure_logging(False, None, interactive=True)
        self.assertEqual([type(handler) for handler in self.package_logger.handlers], [logging.NullHandler])

    def test_log_file_accepts_undecodable_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "dirtable.log"
            cli.configure_logging(False, str(log_path), interactive=True)

            with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
                logging.getLogger("dirtable.file_table_model.snapshot").warning("skipping %s", "bad\udcffname")
            for handler in self.package_logger.handlers:
                handler.flush()
            content = log_path.read_bytes()

        self.assertIn(b"skipping bad\\udcffname", content)
        self.assertNotIn("Logging error", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
