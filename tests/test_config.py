from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from buffersticks import config
from buffersticks.items import Item


class ConfigFileTests(unittest.TestCase):
    def test_missing_file_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("buffersticks.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})

    def test_saved_config_is_loaded_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "buffersticks.json"
            with mock.patch("buffersticks.config.CONFIG_PATH", config_path):
                config.save_config({"label_show": "always", "list": {"show": ["stick", "label"]}})

                saved = config.load_config()

        self.assertEqual(saved, {"label_show": "always", "list": {"show": ["stick", "label"]}})

    def test_malformed_json_is_ignored_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "buffersticks.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("buffersticks.config.CONFIG_PATH", config_path):
                with self.assertLogs("buffersticks.config", level="WARNING"):
                    self.assertEqual(config.load_config(), {})

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "buffersticks.json"
            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("buffersticks.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


class ConfigFromDictTests(unittest.TestCase):
    def test_empty_dict_gives_defaults(self) -> None:
        self.assertEqual(config.config_from_dict({}), config.DEFAULT_CONFIG)

    def test_nested_overrides_are_deep_merged(self) -> None:
        loaded = config.config_from_dict(
            {
                "label_show": "always",
                "active_char": "━━",
                "list": {"keys": {"close_buffer": "CTRL_C"}, "filter": {"title": "> "}},
                "padding": {"right": 3, "left": "wide"},
                "highlights": {"label": "bold #ffffff", "broken": 7},
            }
        )

        self.assertEqual(loaded.label_show, "always")
        self.assertEqual(loaded.active_char, "━━")
        self.assertEqual(loaded.list.keys.close_buffer, "CTRL_C")
        self.assertEqual(loaded.list.keys.move_up, "UP")
        self.assertEqual(loaded.list.filter.title, "> ")
        self.assertEqual(loaded.list.filter.title_empty, "Filter")
        self.assertEqual(loaded.padding, config.Padding(top=0, right=3, bottom=0, left=1))
        self.assertEqual(loaded.highlights["label"], "bold #ffffff")
        self.assertEqual(loaded.highlights["active"], config.DEFAULT_HIGHLIGHTS["active"])
        self.assertNotIn("broken", loaded.highlights)

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        loaded = config.config_from_dict(
            {
                "label_show": "sometimes",
                "list": {"show": ["filename", "bogus", "label"], "filter": {"fuzzy_cutoff": 0}},
                "preview": {"max_lines": True, "enabled": "no"},
                "padding": {"top": -4},
            }
        )

        self.assertEqual(loaded.label_show, "list")
        self.assertEqual(loaded.list.show, ("filename", "label"))
        self.assertEqual(loaded.list.filter.fuzzy_cutoff, 100)
        self.assertEqual(loaded.preview, config.PreviewConfig())
        self.assertEqual(loaded.padding.top, 0)

    def test_non_object_sections_are_ignored(self) -> None:
        loaded = config.config_from_dict({"list": "compact", "padding": [1, 2]})

        self.assertEqual(loaded.list, config.ListConfig())
        self.assertEqual(loaded.padding, config.Padding())

    def test_item_filter_is_built_from_config(self) -> None:
        loaded = config.config_from_dict({"filter": {"names": ["^term://"], "kinds": ["qf"]}})

        self.assertTrue(loaded.filter.excludes(Item(id=1, raw_name="term://bash")))
        self.assertTrue(loaded.filter.excludes(Item(id=2, raw_name="list", kind="qf")))
        self.assertFalse(loaded.filter.excludes(Item(id=3, raw_name="main.rs", kind="rs")))


if __name__ == "__main__":
    unittest.main()
