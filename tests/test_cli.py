"""CLI argument handling and output tests.

``run_picker`` is patched out; fake pickers act on the ``BufferList`` the
way a finished interactive session would.
"""

from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from buffersticks import cli
from buffersticks.items import LabeledItem
from buffersticks.session.actions import CloseAction, OpenAction


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.files = []
        for name in ("main.rs", "mod.rs", "lib.rs"):
            path = self.root / name
            path.write_text("fn main() {}\n", encoding="utf-8")
            self.files.append(str(path))
        self.config_path = self.root / "config" / "buffersticks.json"
        patcher = mock.patch("buffersticks.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def run_cli(self, argv: list[str], picker) -> str:
        out = io.StringIO()
        with mock.patch("buffersticks.cli.run_picker", side_effect=picker) as run_picker:
            with contextlib.redirect_stdout(out):
                cli.main(argv)
        self.run_picker = run_picker
        return out.getvalue()

    def test_open_prints_chosen_path(self) -> None:
        def pick(buffers, config, action, **kwargs) -> None:
            self.assertIsInstance(action, OpenAction)
            buffers.open_item(LabeledItem(id=3, raw_name=self.files[2], label="l"))

        output = self.run_cli(self.files, pick)

        self.assertEqual(output, f"{self.files[2]}\n")

    def test_cancelled_open_exits_with_status_one(self) -> None:
        with self.assertRaises(SystemExit) as raised:
            self.run_cli(self.files, lambda *args, **kwargs: None)

        self.assertEqual(raised.exception.code, 1)

    def test_close_prints_remaining_paths(self) -> None:
        def pick(buffers, config, action, **kwargs) -> None:
            self.assertIsInstance(action, CloseAction)
            buffers.close_item(LabeledItem(id=1, raw_name=self.files[0], label="ma"))

        output = self.run_cli(["--action", "close", *self.files], pick)

        self.assertEqual(output.splitlines(), self.files[1:])

    def test_missing_path_is_reported(self) -> None:
        with self.assertRaises(SystemExit) as raised:
            self.run_cli([self.files[0], str(self.root / "nope.rs")], lambda *args, **kwargs: None)

        self.assertIn("nope.rs", str(raised.exception.code))

    def test_options_flow_into_config_and_buffers(self) -> None:
        seen = {}

        def pick(buffers, config, action, **kwargs) -> None:
            seen["config"] = config
            seen["items"] = buffers.list_items()
            seen["kwargs"] = kwargs
            buffers.open_item(seen["items"][0])

        self.run_cli(
            [
                "--current",
                self.files[1],
                "--modified",
                self.files[2],
                "--exclude",
                r"\.tmp$",
                "--no-preview",
                "--no-color",
                "--style",
                "friendly",
                *self.files,
            ],
            pick,
        )

        config = seen["config"]
        self.assertIn(r"\.tmp$", config.filter.names)
        self.assertFalse(config.preview.enabled)
        self.assertEqual(seen["kwargs"], {"no_color": True, "style": "friendly"})
        self.assertEqual([item.is_current for item in seen["items"]], [False, True, False])
        self.assertEqual([item.is_modified for item in seen["items"]], [False, False, True])

    def test_label_show_is_saved_on_request(self) -> None:
        def pick(buffers, config, action, **kwargs) -> None:
            self.assertEqual(config.label_show, "always")
            buffers.open_item(buffers.list_items()[0])

        self.run_cli(["--label-show", "always", "--save-config", *self.files], pick)

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"label_show": "always"})

    def test_label_show_without_save_leaves_config_untouched(self) -> None:
        def pick(buffers, config, action, **kwargs) -> None:
            buffers.open_item(buffers.list_items()[0])

        self.run_cli(["--label-show", "never", *self.files], pick)

        self.assertFalse(self.config_path.exists())

    def test_default_paths_are_visible_files_in_cwd(self) -> None:
        (self.root / ".hidden").write_text("", encoding="utf-8")
        (self.root / "Zeta.md").write_text("", encoding="utf-8")
        (self.root / "subdir").mkdir()
        previous = os.getcwd()
        os.chdir(self.root)
        self.addCleanup(os.chdir, previous)

        self.assertEqual(cli._default_paths(), ["lib.rs", "main.rs", "mod.rs", "Zeta.md"])

    def test_invalid_action_is_rejected_by_parser(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.build_parser().parse_args(["--action", "rename"])


if __name__ == "__main__":
    unittest.main()
