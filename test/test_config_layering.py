"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchSpec.config import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "pagination": {"default_per_page": 30},
        "schema": {"text_fields": ["name", "description"], "location_field": "location"},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.pagination.default_per_page, 30)
        self.assertEqual(cfg.schema.text_fields, ("name", "description"))
        self.assertEqual(cfg.schema.location_field, "location")

    def test_empty_config_uses_defaults(self) -> None:
        self.assertEqual(parse_config_dict({}), AppConfig())

    def test_log_level_is_normalized(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "debug"
        self.assertEqual(parse_config_dict(raw).runtime.level, "DEBUG")

    def test_invalid_log_level_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_non_positive_default_per_page(self) -> None:
        raw = _base_raw_config()
        raw["pagination"]["default_per_page"] = 0
        with self.assertRaisesRegex(ValueError, "pagination\\.default_per_page"):
            parse_config_dict(raw)

    def test_default_per_page_type_error(self) -> None:
        raw = _base_raw_config()
        raw["pagination"]["default_per_page"] = "30"
        with self.assertRaisesRegex(TypeError, "pagination\\.default_per_page"):
            parse_config_dict(raw)

    def test_text_fields_item_type_error(self) -> None:
        raw = _base_raw_config()
        raw["schema"]["text_fields"] = ["name", 3]
        with self.assertRaisesRegex(TypeError, "schema\\.text_fields\\[1\\]"):
            parse_config_dict(raw)

    def test_unknown_section_key(self) -> None:
        raw = _base_raw_config()
        raw["pagination"]["max_per_page"] = 100
        with self.assertRaisesRegex(ValueError, "max_per_page"):
            parse_config_dict(raw)

    def test_unknown_root_section(self) -> None:
        raw = _base_raw_config()
        raw["queries"] = []
        with self.assertRaisesRegex(ValueError, "queries"):
            parse_config_dict(raw)

    def test_section_must_be_mapping(self) -> None:
        with self.assertRaisesRegex(TypeError, "schema"):
            parse_config_dict({"schema": ["name"]})

    def test_merge_config_dicts_deep_merges(self) -> None:
        merged = merge_config_dicts(_base_raw_config(), {"schema": {"text_fields": ["title"]}})
        self.assertEqual(merged["schema"], {"text_fields": ["title"], "location_field": "location"})
        self.assertEqual(merged["pagination"], {"default_per_page": 30})


class TestConfigFiles(unittest.TestCase):
    def test_repository_default_config_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.pagination.default_per_page, 30)
        self.assertEqual(cfg.schema.text_fields, ())

    def test_override_is_merged_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override = Path(tmp) / "override.yml"
            override.write_text("pagination:\n  default_per_page: 50\n", encoding="utf-8")
            cfg = load_config_with_defaults(override, default_path=REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.pagination.default_per_page, 50)
        self.assertEqual(cfg.schema.location_field, "location")
        self.assertEqual(cfg.runtime.level, "INFO")

    def test_non_mapping_yaml_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "mapping"):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
