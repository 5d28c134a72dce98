from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rawprompt.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("rawprompt.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_file_yields_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_engine_config(), config.EngineConfig())

    def test_malformed_json_is_ignored(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

        self.config_path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text(
            json.dumps({"esc_delay_ms": True, "hide_cursor": "no", "clear_on_end": False}),
            encoding="utf-8",
        )
        loaded = config.load_engine_config()
        self.assertEqual(loaded.esc_delay_ms, config.DEFAULT_ESC_DELAY_MS)
        self.assertTrue(loaded.hide_cursor)
        self.assertFalse(loaded.clear_on_end)

        for bad in (-1, config.MAX_ESC_DELAY_MS + 1, 12.5, "40"):
            self.config_path.write_text(json.dumps({"esc_delay_ms": bad}), encoding="utf-8")
            self.assertEqual(config.load_engine_config().esc_delay_ms, config.DEFAULT_ESC_DELAY_MS)

    def test_save_merges_with_unrelated_keys(self) -> None:
        config.save_config({"theme": "dark"})
        config.save_engine_config(config.EngineConfig(esc_delay_ms=0, hide_cursor=False))

        saved = config.load_config()
        self.assertEqual(saved.get("theme"), "dark")
        self.assertEqual(saved.get("esc_delay_ms"), 0)
        self.assertEqual(
            config.load_engine_config(),
            config.EngineConfig(esc_delay_ms=0, hide_cursor=False, clear_on_end=True),
        )

    def test_save_failure_is_swallowed(self) -> None:
        with mock.patch.object(Path, "write_text", side_effect=OSError("read-only")):
            config.save_config({"esc_delay_ms": 10})
        self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
