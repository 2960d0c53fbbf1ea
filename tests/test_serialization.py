"""
Tests for settings and schema serialization.

These tests verify:
    - WriteSettings round-trip through dict, JSON and YAML
    - Invalid settings are rejected with SettingsError
    - Bundle schemas are described in declaration order
"""

import json

import pytest
import yaml

from structuredvg.bundle import get_bundle
from structuredvg.common import CoreAttributes
from structuredvg.errors import SettingsError
from structuredvg.io import WriteSettings
from structuredvg.path import ElementPath
from structuredvg.serialization import (
    bundle_to_dict,
    bundle_to_json,
    bundle_to_yaml,
    load_settings,
    settings_from_dict,
    settings_from_json,
    settings_from_yaml,
    settings_to_dict,
    settings_to_json,
    settings_to_yaml,
)


class TestSettings:
    """Test WriteSettings serialization."""

    def test_dict_round_trip(self):
        settings = WriteSettings(precision=2)
        assert settings_to_dict(settings) == {"precision": 2}
        assert settings_from_dict(settings_to_dict(settings)) == settings

    def test_json_round_trip(self):
        settings = WriteSettings(precision=6)
        assert settings_from_json(settings_to_json(settings)) == settings

    def test_yaml_round_trip(self):
        settings = WriteSettings(precision=0)
        assert settings_from_yaml(settings_to_yaml(settings)) == settings

    def test_missing_keys_use_defaults(self):
        assert settings_from_dict({}) == WriteSettings()
        assert settings_from_dict(None) == WriteSettings()

    def test_unknown_key_rejected(self):
        with pytest.raises(SettingsError, match="indent"):
            settings_from_dict({"precision": 2, "indent": 4})

    def test_non_mapping_rejected(self):
        with pytest.raises(SettingsError):
            settings_from_yaml("- 1\n- 2\n")

    def test_invalid_json(self):
        with pytest.raises(SettingsError):
            settings_from_json("{precision: 2")

    @pytest.mark.parametrize("precision", [-1, "4", 1.5, True])
    def test_invalid_precision(self, precision):
        with pytest.raises(SettingsError):
            settings_from_dict({"precision": precision})


class TestLoadSettings:
    """Test loading settings from a file."""

    def test_load(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("precision: 3\n", encoding="utf-8")
        assert load_settings(str(path)) == WriteSettings(precision=3)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(str(path)) == WriteSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            load_settings(str(tmp_path / "missing.yaml"))

    def test_bad_value(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("precision: -2\n", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(str(path))


class TestBundleDescription:
    """Test schema descriptions."""

    def test_core_attributes(self):
        description = bundle_to_dict(get_bundle(CoreAttributes))
        assert description["name"] == "CoreAttributes"

        entries = description["entries"]
        assert [e["field"] for e in entries] == [
            "id",
            "tabindex",
            "xml_lang",
            "xml_space",
            "class_",
            "style",
            "data",
            "other",
        ]
        assert entries[0] == {
            "type": "attribute",
            "field": "id",
            "name": "id",
            "presence": "if_some",
            "value": "pass_through",
        }
        assert entries[1]["value"] == "transform"
        assert entries[3] == {
            "type": "attribute",
            "field": "xml_space",
            "name": "xml:space",
            "presence": "if_not_default",
            "value": "literal",
            "literal": "preserve",
        }
        assert entries[6] == {"type": "bundle", "field": "data"}

    def test_yaml_keeps_declaration_order(self):
        text = bundle_to_yaml(get_bundle(ElementPath))
        loaded = yaml.safe_load(text)
        assert loaded["name"] == "ElementPath"
        assert [e["field"] for e in loaded["entries"]] == [
            "conditional_processing",
            "core",
            "graphical_event",
            "d",
            "path_length",
        ]
        assert loaded["entries"][4]["name"] == "pathLength"

    def test_json(self):
        loaded = json.loads(bundle_to_json(get_bundle(ElementPath)))
        assert loaded == bundle_to_dict(get_bundle(ElementPath))
