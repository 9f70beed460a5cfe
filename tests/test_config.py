from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirtable import config


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, text: str | None):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        if text is not None:
            config_path.write_text(text, encoding="utf-8")
        patcher = mock.patch("dirtable.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_file_uses_defaults(self) -> None:
        self._with_config(None)
        self.assertEqual(config.load_config(), {})
        self.assertIsNone(config.load_theme_name())
        self.assertFalse(config.load_no_color())

    def test_theme_and_no_color_are_read(self) -> None:
        self._with_config('{"theme": " ocean ", "no_color": true}')
        self.assertEqual(config.load_theme_name(), "ocean")
        self.assertTrue(config.load_no_color())

    def test_malformed_json_is_ignored_with_warning(self) -> None:
        self._with_config("{not json")
        with self.assertLogs("dirtable.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_non_object_and_wrong_types_are_ignored(self) -> None:
        self._with_config('["theme", "ocean"]')
        self.assertEqual(config.load_config(), {})

        self._with_config('{"theme": 3, "no_color": "yes"}')
        self.assertIsNone(config.load_theme_name())
        self.assertFalse(config.load_no_color())


if __name__ == "__main__":
    unittest.main()
