"""
Unit tests for engine settings and ruleset configuration files.
"""

import pytest
from pydantic import ValidationError

from rulegate import EngineSettings
from rulegate.core.rules import RuleConfigBuilder, RuleConfigLoader, RuleParser


class TestEngineSettings:
    """Tests for settings defaults, validation and environment loading"""

    def test_defaults(self, settings):
        assert settings.rules_delimiter == "|"
        assert settings.parameters_delimiter == ","
        assert settings.parameters_array_delimiter == ";"
        assert settings.field_chars_to_spaces == ("_", "-")
        assert settings.language == "en"

    def test_delimiter_must_be_single_character(self):
        with pytest.raises(ValidationError):
            EngineSettings(rules_delimiter="||")

    def test_delimiters_must_differ(self):
        with pytest.raises(ValidationError):
            EngineSettings(parameters_delimiter=";")

    def test_settings_are_frozen(self, settings):
        with pytest.raises(ValidationError):
            settings.language = "fr"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RULEGATE_RULES_DELIMITER", "#")
        monkeypatch.setenv("RULEGATE_LANG", "fr")
        monkeypatch.setenv("RULEGATE_FIELD_CHARS_TO_SPACES", "_.")

        settings = EngineSettings.from_env()

        assert settings.rules_delimiter == "#"
        assert settings.parameters_delimiter == ","
        assert settings.language == "fr"
        assert settings.field_chars_to_spaces == ("_", ".")

    def test_from_env_without_variables(self):
        assert EngineSettings.from_env() == EngineSettings()


class TestRuleConfigLoader:
    """Tests for loading rulesets from YAML"""

    def test_load(self, tmp_path):
        config_file = tmp_path / "rules.yaml"
        config_file.write_text(
            """
validation:
  username: "required|alpha_numeric|between_len,3;16"
  tags:
    - required
    - [max_len, 10]
filters:
  username: "trim|lower_case"
messages:
  username:
    required: "Pick a username"
field_names:
  username: "User name"
error_messages:
  valid_email: "Bad email"
"""
        )

        config = RuleConfigLoader(config_file).load()

        assert config.validation["username"] == "required|alpha_numeric|between_len,3;16"
        assert config.validation["tags"] == ["required", ["max_len", 10]]
        assert config.filters == {"username": "trim|lower_case"}
        assert config.messages == {"username": {"required": "Pick a username"}}
        assert config.field_names == {"username": "User name"}
        assert config.error_messages == {"valid_email": "Bad email"}

    def test_filters_only(self, tmp_path):
        config_file = tmp_path / "filters.yaml"
        config_file.write_text("filters:\n  name: trim\n")

        config = RuleConfigLoader(config_file).load()

        assert config.validation == {}
        assert config.filters == {"name": "trim"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("validation: [unclosed\n")

        with pytest.raises(ValueError):
            RuleConfigLoader(config_file).load()

    def test_missing_sections(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("field_names:\n  a: A\n")

        with pytest.raises(ValueError, match="'validation' or 'filters'"):
            RuleConfigLoader(config_file).load()

    def test_bad_chain_type(self, tmp_path):
        config_file = tmp_path / "bad_chain.yaml"
        config_file.write_text("validation:\n  age: 42\n")

        with pytest.raises(ValueError, match="age"):
            RuleConfigLoader(config_file).load()


class TestRuleConfigBuilder:
    """Tests for building rulesets in code"""

    def test_build(self):
        builder = (
            RuleConfigBuilder()
            .add_required("username")
            .add_rule("username", "between_len", 3, 16)
            .add_filter("username", "trim")
        )

        assert builder.build() == {"username": ["required", ["between_len", [3, 16]]]}
        assert builder.build_filters() == {"username": ["trim"]}

    def test_built_chain_parses(self):
        ruleset = RuleConfigBuilder().add_rule("age", "min_numeric", 18).build()

        rules = RuleParser().parse(ruleset["age"])

        assert rules[0].name == "min_numeric"
        assert rules[0].params == (18,)

    def test_build_config(self):
        config = RuleConfigBuilder().add_required("a").add_filter("a", "trim").build_config()

        assert config.validation == {"a": ["required"]}
        assert config.filters == {"a": ["trim"]}
