"""Tests for toolcards.shared.config and toolcards.engine.yaml_config."""

import pytest
import yaml

from toolcards.shared.config import ParserConfig
from toolcards.shared.errors import ConfigError
from toolcards.engine.yaml_config import load_yaml_config, parse_config_dict


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    import os
    for key in list(os.environ):
        if key.startswith("TOOLCARDS_"):
            monkeypatch.delenv(key)


# ── ParserConfig.from_env ──


class TestFromEnv:
    def test_defaults(self):
        config = ParserConfig.from_env()
        assert config.fence == "```"
        assert config.block_label == "tool-result"
        assert config.entity_keywords == ["HOSPITAL", "CLINIC", "MEDICAL"]
        assert config.default_tool == "Unknown Tool"
        assert config.default_status == "info"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TOOLCARDS_BLOCK_LABEL", "card")
        monkeypatch.setenv("TOOLCARDS_ENTITY_KEYWORDS", "theatre, ward ,")
        monkeypatch.setenv("TOOLCARDS_MIN_HEADING_TOKENS", "3")
        monkeypatch.setenv("TOOLCARDS_DEFAULT_STATUS", "SUCCESS")
        config = ParserConfig.from_env()
        assert config.block_label == "card"
        assert config.entity_keywords == ["theatre", "ward"]
        assert config.min_heading_tokens == 3
        assert config.default_status == "success"

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("TOOLCARDS_MIN_HEADING_TOKENS", "many")
        with pytest.raises(ConfigError):
            ParserConfig.from_env()

    def test_bad_status(self, monkeypatch):
        monkeypatch.setenv("TOOLCARDS_DEFAULT_STATUS", "pending")
        with pytest.raises(ConfigError, match="default_status"):
            ParserConfig.from_env()


class TestValidate:
    def test_multi_char_separator_rejected(self):
        with pytest.raises(ConfigError, match="separator"):
            ParserConfig(separator="::").validate()

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ConfigError, match="log_level"):
            ParserConfig(log_level="LOUD").validate()

    def test_valid_config_returned(self):
        config = ParserConfig()
        assert config.validate() is config


# ── YAML ──


class TestYamlConfig:
    def test_parser_section(self, tmp_path):
        path = tmp_path / "toolcards.yaml"
        path.write_text(yaml.safe_dump({
            "parser": {
                "block_label": "result",
                "bullet_markers": ["-", "*"],
                "entity_keywords": "THEATRE",
                "min_heading_tokens": 3,
            },
            "logging": {"level": "debug"},
        }))
        config = load_yaml_config(path)
        assert config.block_label == "result"
        assert config.bullet_markers == ["-", "*"]
        assert config.entity_keywords == ["THEATRE"]
        assert config.min_heading_tokens == 3
        assert config.log_level == "DEBUG"

    def test_yaml_wins_over_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOOLCARDS_BLOCK_LABEL", "from-env")
        monkeypatch.setenv("TOOLCARDS_DEFAULT_TOOL", "Env Tool")
        path = tmp_path / "toolcards.yaml"
        path.write_text("parser:\n  block_label: from-yaml\n")
        config = load_yaml_config(path)
        assert config.block_label == "from-yaml"
        assert config.default_tool == "Env Tool"

    def test_empty_file_uses_base(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == ParserConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("parser: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_yaml_config(path)

    def test_wrong_type(self):
        with pytest.raises(ConfigError, match="min_heading_tokens"):
            parse_config_dict({"parser": {"min_heading_tokens": "two"}})

    def test_unknown_keys_ignored(self):
        config = parse_config_dict({"parser": {"colour": "blue"}})
        assert config == ParserConfig()

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ConfigError):
            parse_config_dict(["parser"])
