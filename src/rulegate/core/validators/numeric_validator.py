"""
Numeric and type validators.
"""

import re
from collections.abc import Sequence
from typing import Any

from .base_validator import BaseValidator, number_param, to_number

_INTEGER_RE = re.compile(r"[+-]?\d+")

TRUES = ("1", 1, "true", True, "yes", "on")
FALSES = ("0", 0, "false", False, "no", "off")


class NumericValidator(BaseValidator):
    """Value must be a number or a numeric string."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return to_number(value) is not None

    @property
    def rule_name(self) -> str:
        return "numeric"


class IntegerValidator(BaseValidator):
    """Value must be an integer or an integer string (booleans are rejected)."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        return isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()) is not None

    @property
    def rule_name(self) -> str:
        return "integer"


class FloatValidator(BaseValidator):
    """Value must parse as a float."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return to_number(value) is not None

    @property
    def rule_name(self) -> str:
        return "float"


class BooleanValidator(BaseValidator):
    """
    Value must be one of the accepted boolean spellings.

    Matching is strict: "true" passes, "True" does not, and 1 passes but 1.0 does not.
    """

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return any(value == accepted and type(value) is type(accepted) for accepted in TRUES + FALSES)

    @property
    def rule_name(self) -> str:
        return "boolean"


class MinNumericValidator(BaseValidator):
    """Numeric value must be greater than or equal to params[0]."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        bound = number_param(params, 0, self.rule_name)
        number = to_number(value)
        if number is None:
            return False
        return number >= bound

    @property
    def rule_name(self) -> str:
        return "min_numeric"


class MaxNumericValidator(BaseValidator):
    """Numeric value must be less than or equal to params[0]."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        bound = number_param(params, 0, self.rule_name)
        number = to_number(value)
        if number is None:
            return False
        return number <= bound

    @property
    def rule_name(self) -> str:
        return "max_numeric"
