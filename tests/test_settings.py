"""Tests for the configuration model."""

import yaml

from homeworkcheck.config.settings import DEFAULT_SETTINGS, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.tolerance.default_max_distance == 2
        assert settings.tolerance.short_answer_length == 4
        assert settings.tolerance.blank_max_distance == 1
        assert settings.tolerance.correction_max_distance == 3
        assert settings.writing.key_element_pass_ratio == 0.75
        assert settings.writing.key_element_fail_ratio == 0.5
        assert settings.writing.min_sentence_words == 3

    def test_load_missing_file(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings == Settings()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        with open(path, "w") as f:
            yaml.dump({"tolerance": {"blank_max_distance": 2}, "writing": {"min_sentence_words": 4}}, f)
        settings = Settings.load(path)
        assert settings.tolerance.blank_max_distance == 2
        assert settings.tolerance.default_max_distance == 2
        assert settings.writing.min_sentence_words == 4

    def test_env_override_applied_on_load(self, monkeypatch, tmp_path):
        path = tmp_path / "config.yaml"
        with open(path, "w") as f:
            yaml.dump({"tolerance": {"blank_max_distance": 2}}, f)
        monkeypatch.setenv("HOMEWORKCHECK_MAX_DISTANCE", "1")
        settings = Settings.load(path)
        assert settings.tolerance.default_max_distance == 1
        assert settings.tolerance.blank_max_distance == 2

    def test_bad_env_ignored_on_load(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOMEWORKCHECK_MAX_DISTANCE", "lots")
        assert Settings.load(tmp_path / "missing.yaml").tolerance.default_max_distance == 2

    def test_default_settings_ignore_env(self, monkeypatch):
        monkeypatch.setenv("HOMEWORKCHECK_MAX_DISTANCE", "0")
        assert DEFAULT_SETTINGS.tolerance.default_max_distance == 2
        assert Settings().tolerance.default_max_distance == 2
