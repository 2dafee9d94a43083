"""CLI argument and end-to-end behavior tests.

Verifies how ``dirlist.cli.main`` maps flags onto a listing request, merges
display settings, and reports the exit status.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirlist import cli
from dirlist.config import DisplaySettings
from dirlist.theme import DEFAULT_THEME


class CliTestBase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.config_path = self.root / "config" / "config.json"
        patcher = mock.patch("dirlist.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.tree = self.root / "tree"
        self.tree.mkdir()
        (self.tree / "b.txt").write_text("b", encoding="utf-8")
        (self.tree / "a.txt").write_text("a", encoding="utf-8")
        (self.tree / "sub").mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_main(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            status = cli.main(list(argv))
        return status, stdout.getvalue(), stderr.getvalue()


class CliListingTests(CliTestBase):
    def test_one_column_listing(self) -> None:
        status, stdout, stderr = self.run_main("-1", str(self.tree))
        self.assertEqual(status, 0)
        self.assertEqual(stdout, "a.txt\nb.txt\nsub\n")
        self.assertEqual(stderr, "")

    def test_non_terminal_output_is_uncolored_by_default(self) -> None:
        _status, stdout, _stderr = self.run_main(str(self.tree))
        self.assertEqual(stdout, "a.txt   b.txt   sub   \n")

    def test_color_always_emits_theme_sequences(self) -> None:
        _status, stdout, _stderr = self.run_main("--color", "always", str(self.tree))
        self.assertIn(f"{DEFAULT_THEME.directory}sub{DEFAULT_THEME.reset}", stdout)

    def test_no_color_wins_over_saved_color(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text(json.dumps({"color": "always"}), encoding="utf-8")
        _status, stdout, _stderr = self.run_main("--no-color", str(self.tree))
        self.assertNotIn("\033[", stdout)

    def test_all_flag_includes_dot_entries(self) -> None:
        (self.tree / ".hidden").write_text("", encoding="utf-8")
        _status, stdout, _stderr = self.run_main("-a", "-1", str(self.tree))
        self.assertEqual(stdout, ".\n..\n.hidden\na.txt\nb.txt\nsub\n")

    def test_defaults_to_current_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.tree)
            _status, stdout, _stderr = self.run_main("-1")
        finally:
            os.chdir(previous_cwd)
        self.assertEqual(stdout, "a.txt\nb.txt\nsub\n")

    def test_missing_path_reports_but_exits_zero(self) -> None:
        status, stdout, stderr = self.run_main(str(self.root / "nope"), str(self.tree))
        self.assertEqual(status, 0)
        self.assertIn(f"\n{self.tree}:\n", stdout)
        self.assertTrue(stderr.startswith("dirlist: stat failed: "))


class CliSettingsTests(CliTestBase):
    def test_save_settings_persists_display_options(self) -> None:
        self.run_main("--save-settings", "--theme", "Bright", "--color", "never", str(self.tree))

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["theme"], "bright")
        self.assertEqual(saved["color"], "never")

    def test_settings_are_not_saved_without_flag(self) -> None:
        self.run_main("--theme", "bright", str(self.tree))
        self.assertFalse(self.config_path.exists())

    def test_configured_path_cap_exits_one(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text(json.dumps({"max_paths": 1}), encoding="utf-8")

        status, stdout, stderr = self.run_main(str(self.tree), str(self.tree / "sub"))

        self.assertEqual(status, 1)
        self.assertEqual(stdout, "")
        self.assertEqual(stderr, "dirlist: too many arguments (2 > 1)\n")

    def test_settings_from_args_overlays_base(self) -> None:
        args = cli.build_parser().parse_args(["--time-locale", "fr_FR.UTF-8", "--no-color"])
        base = DisplaySettings(theme="bright", color="always")

        settings = cli.settings_from_args(args, base)

        self.assertEqual(settings.theme, "bright")
        self.assertEqual(settings.color, "never")
        self.assertEqual(settings.time_locale, "fr_FR.UTF-8")


class RequestFromArgsTests(unittest.TestCase):
    def test_flags_map_to_request_fields(self) -> None:
        args = cli.build_parser().parse_args(["-l", "-t", "-i", "-1", "-d", "x", "y"])
        request = cli.request_from_args(args)

        self.assertTrue(request.long_format)
        self.assertTrue(request.sort_by_mod_time)
        self.assertTrue(request.show_inode)
        self.assertTrue(request.one_column)
        self.assertTrue(request.directory_only)
        self.assertFalse(request.show_hidden)
        self.assertFalse(request.include_dot_entries)
        self.assertEqual(args.paths, ["x", "y"])

    def test_no_sort_implies_dot_entries(self) -> None:
        request = cli.request_from_args(cli.build_parser().parse_args(["-f"]))
        self.assertTrue(request.no_sort)
        self.assertTrue(request.include_dot_entries)
        self.assertTrue(request.dotfiles_visible)

    def test_combined_short_flags(self) -> None:
        request = cli.request_from_args(cli.build_parser().parse_args(["-la"]))
        self.assertTrue(request.long_format)
        self.assertTrue(request.show_hidden)


if __name__ == "__main__":
    unittest.main()
