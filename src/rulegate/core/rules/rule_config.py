"""
Ruleset configuration management.

Loads validation and filter rulesets from YAML files and provides a builder
for assembling rulesets in code.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class RulesetConfig(BaseModel):
    """
    Everything a ruleset file can configure.

    Attributes:
        validation: Field -> validation rule chain (string or list)
        filters: Field -> filter chain (string or list)
        messages: Field -> rule -> message template
        field_names: Field -> readable label
        error_messages: Rule -> message template
    """

    validation: dict[str, Any] = Field(default_factory=dict)
    filters: dict[str, Any] = Field(default_factory=dict)
    messages: dict[str, dict[str, str]] = Field(default_factory=dict)
    field_names: dict[str, str] = Field(default_factory=dict)
    error_messages: dict[str, str] = Field(default_factory=dict)


class RuleConfigLoader:
    """
    Loads rulesets from YAML configuration files.

    Expected YAML format:
    ```yaml
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
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the ruleset loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Ruleset configuration file not found: {config_path}")

    def load(self) -> RulesetConfig:
        """
        Load and parse the ruleset file.

        Returns:
            RulesetConfig with every section (missing sections are empty)

        Raises:
            ValueError: If the YAML is invalid or has neither rules nor filters
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config, dict) or not ({"validation", "filters"} & set(config)):
            raise ValueError("Configuration file must contain a 'validation' or 'filters' section")

        for section in ("validation", "filters"):
            chains = config.get(section) or {}
            if not isinstance(chains, dict):
                raise ValueError(f"Section '{section}' must map field names to rule chains")
            for field_name, chain in chains.items():
                if not isinstance(chain, (str, list, dict)):
                    raise ValueError(
                        f"Rules for field '{field_name}' in '{section}' must be a string, list or mapping"
                    )

        return RulesetConfig(**{key: value for key, value in config.items() if value is not None})


class RuleConfigBuilder:
    """
    Programmatically build rulesets (for testing or dynamic rules).

    Chains are built in the structured list form.
    """

    def __init__(self):
        self.validation: dict[str, list[Any]] = {}
        self.filters: dict[str, list[Any]] = {}

    def add_rule(self, field_name: str, rule_name: str, *params: Any) -> "RuleConfigBuilder":
        """Append a validation rule to a field's chain."""
        self.validation.setdefault(field_name, []).append(self._entry(rule_name, params))
        return self

    def add_required(self, field_name: str) -> "RuleConfigBuilder":
        return self.add_rule(field_name, "required")

    def add_filter(self, field_name: str, filter_name: str, *params: Any) -> "RuleConfigBuilder":
        """Append a filter to a field's chain."""
        self.filters.setdefault(field_name, []).append(self._entry(filter_name, params))
        return self

    def build(self) -> dict[str, list[Any]]:
        """Return the validation ruleset."""
        return {field: list(chain) for field, chain in self.validation.items()}

    def build_filters(self) -> dict[str, list[Any]]:
        """Return the filter ruleset."""
        return {field: list(chain) for field, chain in self.filters.items()}

    def build_config(self) -> RulesetConfig:
        return RulesetConfig(validation=self.build(), filters=self.build_filters())

    @staticmethod
    def _entry(name: str, params: tuple[Any, ...]) -> Any:
        if not params:
            return name
        return [name, list(params)]
