"""
Engine settings.

Delimiters and field-name separators are process-wide settings read once,
either from defaults or from RULEGATE_* environment variables.
"""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class EngineSettings(BaseModel):
    """
    Settings shared by every validation and filter run of a context.

    Attributes:
        rules_delimiter: Separates rules in a string chain ("required|max_len,5")
        parameters_delimiter: Separates a rule name from its parameters
        parameters_array_delimiter: Splits a parameter suffix into a list ("between_len,3;8")
        field_chars_to_spaces: Characters replaced by spaces in readable field names
        language: Default message catalog language
    """

    model_config = ConfigDict(frozen=True)

    rules_delimiter: str = "|"
    parameters_delimiter: str = ","
    parameters_array_delimiter: str = ";"
    field_chars_to_spaces: tuple[str, ...] = ("_", "-")
    language: str = Field("en", min_length=1)

    @field_validator("rules_delimiter", "parameters_delimiter", "parameters_array_delimiter")
    @classmethod
    def check_single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"Delimiter must be a single character, got {v!r}")
        return v

    @model_validator(mode="after")
    def check_distinct_delimiters(self) -> "EngineSettings":
        delimiters = {self.rules_delimiter, self.parameters_delimiter, self.parameters_array_delimiter}
        if len(delimiters) != 3:
            raise ValueError("Rule, parameter and parameter-array delimiters must differ")
        return self

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """
        Build settings from environment variables, falling back to defaults.

        RULEGATE_FIELD_CHARS_TO_SPACES is a plain string of characters ("_-.").
        """
        values = {}
        env_map = {
            "rules_delimiter": "RULEGATE_RULES_DELIMITER",
            "parameters_delimiter": "RULEGATE_PARAMETERS_DELIMITER",
            "parameters_array_delimiter": "RULEGATE_PARAMETERS_ARRAY_DELIMITER",
            "language": "RULEGATE_LANG",
        }
        for field_name, env_name in env_map.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value

        chars = os.getenv("RULEGATE_FIELD_CHARS_TO_SPACES")
        if chars:
            values["field_chars_to_spaces"] = tuple(chars)

        return cls(**values)
