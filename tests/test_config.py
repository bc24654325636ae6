"""Tests for configuration loading."""

import os
from unittest.mock import patch

import pytest
import yaml

from job_filtering.config import DEFAULT_CONFIG, load_config


@pytest.fixture(autouse=True)
def clean_env():
    """Keep provider overrides from the developer's shell out of these tests."""
    with patch.dict(os.environ):
        os.environ.pop("AI_PROVIDER", None)
        os.environ.pop("AI_MODEL", None)
        yield


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_default_path_used_when_present(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("ai:\n  provider: claude\n")

        assert load_config()["ai"]["provider"] == "claude"

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_merges_with_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"filtering": {"max_workers": 2, "thresholds": [85, 70, 55, 35]}}))

        config = load_config(str(path))

        assert config["filtering"]["max_workers"] == 2
        assert config["filtering"]["thresholds"] == [85, 70, 55, 35]
        assert config["filtering"]["scorer_timeout"] == 30.0
        assert config["ai"]["provider"] == "openai"
        assert config["output"]["format"] == "json"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(str(path))

    def test_environment_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("ai:\n  provider: openai\n  model: gpt-4o\n")

        with patch.dict(os.environ, {"AI_PROVIDER": "claude", "AI_MODEL": "claude-test"}):
            config = load_config(str(path))

        assert config["ai"]["provider"] == "claude"
        assert config["ai"]["model"] == "claude-test"

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("output:\n  format: csv\n")

        load_config(str(path))

        assert DEFAULT_CONFIG["output"]["format"] == "json"
