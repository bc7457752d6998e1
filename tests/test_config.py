"""Tests for config loader."""

import pytest
import yaml

from cargo_prepost.config import load_config, deep_merge, DEFAULT_CONFIG
from cargo_prepost.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.delenv("CARGO_PREPOST_CONFIG", raising=False)
    monkeypatch.delenv("CARGO_PREPOST_LOG", raising=False)
    monkeypatch.setattr("cargo_prepost.config.CONFIG_SEARCH_PATHS", [tmp_path / "nonexistent.yml"])


class TestDeepMerge:
    def test_deep_merge_nested(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"b": 99}}
        result = deep_merge(base, override)
        assert result == {"a": {"b": 99, "c": 2}, "d": 3}

    def test_deep_merge_override_leaf(self):
        base = {"a": {"b": 1}}
        override = {"a": "flat"}
        result = deep_merge(base, override)
        assert result == {"a": "flat"}

    def test_deep_merge_does_not_mutate_base(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    def test_default_config_returned_when_no_file(self):
        config = load_config()
        assert config["tool"]["name"] == "cargo"
        assert config["hooks"]["dir"] == DEFAULT_CONFIG["hooks"]["dir"]
        assert config["executor"]["mode"] == "synthesize"

    def test_env_var_config_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yml"
        config_file.write_text(yaml.dump({"executor": {"mode": "rustc"}}))
        monkeypatch.setenv("CARGO_PREPOST_CONFIG", str(config_file))
        config = load_config()
        assert config["executor"]["mode"] == "rustc"
        # Defaults still present for unset keys
        assert config["executor"]["compiler"] == "rustc"
        assert config["hooks"]["source_extension"] == "rs"

    def test_load_config_from_explicit_path(self, tmp_path):
        config_file = tmp_path / "explicit.yml"
        config_file.write_text(yaml.dump({"logging": {"level": "DEBUG"}}))
        config = load_config(config_path=str(config_file))
        assert config["logging"]["level"] == "DEBUG"

    def test_project_config_in_cwd(self, tmp_path):
        (tmp_path / "cargo-prepost.config.yml").write_text(yaml.dump({"hooks": {"dir": "hooks"}}))
        config = load_config(cwd=tmp_path)
        assert config["hooks"]["dir"] == "hooks"

    def test_log_level_env_override(self, monkeypatch):
        monkeypatch.setenv("CARGO_PREPOST_LOG", "info")
        config = load_config()
        assert config["logging"]["level"] == "info"
        assert DEFAULT_CONFIG["logging"]["level"] == "WARNING"

    def test_unknown_executor_mode_rejected(self, tmp_path):
        config_file = tmp_path / "bad.yml"
        config_file.write_text(yaml.dump({"executor": {"mode": "interpret"}}))
        with pytest.raises(ConfigError, match="Unknown executor mode"):
            load_config(config_path=str(config_file))

    def test_malformed_yaml_rejected(self, tmp_path):
        config_file = tmp_path / "broken.yml"
        config_file.write_text("hooks: [unterminated\n")
        with pytest.raises(ConfigError):
            load_config(config_path=str(config_file))
