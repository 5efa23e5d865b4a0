# -*- coding: utf-8 -*-
"""
Unit Tests for Settings Loading
"""

import json

from renparse_settings import load_settings, save_settings, default_settings


class TestLoadSettings:
    """Defaults, validation and corrupt files."""

    def test_missing_file_returns_defaults(self, settings_file):
        assert load_settings(settings_file) == default_settings()

    def test_round_trip(self, settings_file):
        data = default_settings()
        data["tab_policy"] = "expand"
        data["tab_width"] = 4

        assert save_settings(data, settings_file) is True
        assert load_settings(settings_file) == data

    def test_invalid_values_fall_back(self, settings_file):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text(json.dumps({
            "tab_policy": "convert",
            "tab_width": 0,
            "strict": "yes",
        }), encoding='utf-8')

        settings = load_settings(settings_file)

        assert settings["tab_policy"] == "reject"
        assert settings["tab_width"] == 8
        assert settings["strict"] is False

    def test_corrupt_json(self, settings_file):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("{not json", encoding='utf-8')
        assert load_settings(settings_file) == default_settings()

    def test_non_object_json(self, settings_file):
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("[1, 2]", encoding='utf-8')
        assert load_settings(settings_file) == default_settings()
