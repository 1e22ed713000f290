"""Tests for configuration loading."""

import os
from pathlib import Path

import pytest

from speaker_align.config import deep_merge, load_config, load_yaml
from speaker_align.config.loader import apply_env_overrides
from speaker_align.core import ConfigError

CONFIG_DIR = Path(__file__).parents[3] / "configs"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SPEAKER_ALIGN__"):
            monkeypatch.delenv(key)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "base.yaml").write_text(
        "alignment:\n  merge_gap: 0.4\nlog_level: INFO\n", encoding="utf-8"
    )
    (tmp_path / "staging.yaml").write_text(
        "alignment:\n  significant_share: 0.3\nlog_level: WARNING\n", encoding="utf-8"
    )
    return tmp_path


class TestDeepMerge:
    def test_nested_override(self):
        base = {"alignment": {"merge_gap": 0.35, "tie_epsilon": 1e-6}, "log_level": "INFO"}
        override = {"alignment": {"merge_gap": 0.5}}

        merged = deep_merge(base, override)
        assert merged == {
            "alignment": {"merge_gap": 0.5, "tie_epsilon": 1e-6},
            "log_level": "INFO",
        }
        assert base["alignment"]["merge_gap"] == 0.35

    def test_scalar_replaces_mapping(self):
        assert deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


class TestLoadYaml:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("alignment: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml(path) == {}


class TestEnvOverrides:
    def test_nested_key(self, monkeypatch):
        monkeypatch.setenv("SPEAKER_ALIGN__ALIGNMENT__MERGE_GAP", "0.5")
        result = apply_env_overrides({"alignment": {"tie_epsilon": 1e-6}})
        assert result == {"alignment": {"tie_epsilon": 1e-6, "merge_gap": 0.5}}

    def test_value_types(self, monkeypatch):
        monkeypatch.setenv("SPEAKER_ALIGN__NAMING__ALLOW_NAMES", "false")
        monkeypatch.setenv("SPEAKER_ALIGN__FALLBACK__STRATEGIES", "[names]")
        monkeypatch.setenv("SPEAKER_ALIGN__LOG_LEVEL", "DEBUG")

        result = apply_env_overrides({})
        assert result["naming"]["allow_names"] is False
        assert result["fallback"]["strategies"] == ["names"]
        assert result["log_level"] == "DEBUG"

    def test_other_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("OTHER__ALIGNMENT__MERGE_GAP", "9")
        assert apply_env_overrides({}) == {}


class TestLoadConfig:
    def test_defaults_without_files(self, tmp_path):
        config = load_config(config_dir=tmp_path)
        assert config.alignment.merge_gap == 0.35
        assert config.fallback.strategies == ["diarization", "names"]

    def test_env_file_overrides_base(self, config_dir):
        config = load_config(env="staging", config_dir=config_dir)
        assert config.alignment.merge_gap == 0.4
        assert config.alignment.significant_share == 0.3
        assert config.log_level == "WARNING"

    def test_missing_env_file_is_skipped(self, config_dir):
        config = load_config(env="nowhere", config_dir=config_dir)
        assert config.log_level == "INFO"

    def test_explicit_file_overrides_env(self, config_dir, tmp_path):
        extra = tmp_path / "episode.yaml"
        extra.write_text("naming:\n  fixes:\n    Kevin: Gavin\n", encoding="utf-8")

        config = load_config(extra, env="staging", config_dir=config_dir)
        assert config.naming.fixes == {"Kevin": "Gavin"}
        assert config.log_level == "WARNING"

    def test_environment_variables_win(self, config_dir, monkeypatch):
        monkeypatch.setenv("SPEAKER_ALIGN__ALIGNMENT__MERGE_GAP", "0.6")
        config = load_config(env="staging", config_dir=config_dir)
        assert config.alignment.merge_gap == 0.6

    def test_validation_error_is_wrapped(self, config_dir, monkeypatch):
        monkeypatch.setenv("SPEAKER_ALIGN__ALIGNMENT__MERGE_GAP", "-1")
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(config_dir=config_dir)

    def test_shipped_configs(self):
        assert load_config(config_dir=CONFIG_DIR).log_level == "INFO"
        assert load_config(env="development", config_dir=CONFIG_DIR).log_level == "DEBUG"

        production = load_config(env="production", config_dir=CONFIG_DIR)
        assert production.log_level == "WARNING"
        assert production.log_format == "detailed"
