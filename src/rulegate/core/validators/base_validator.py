"""
Base validator interface for built-in validation rules.

Every built-in rule is a BaseValidator subclass registered under its
rule_name. A validator returns True on success and False (or, for backward
compatibility, any list) on failure.
"""

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from rulegate.core.exceptions import ValidationException

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_empty(value: Any) -> bool:
    """An empty value is None, an empty string or an empty list/mapping."""
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, Mapping)) and len(value) == 0:
        return True
    return False


def param(params: Sequence[Any], index: int, default: Any = None) -> Any:
    """Positional parameter at index, or default when absent."""
    if index < len(params):
        return params[index]
    return default


def to_number(value: Any) -> float | None:
    """
    Parse a numeric value or decimal string; None when not numeric.

    Only plain decimal notation is accepted: "nan", "inf" and "1_000" are
    not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not _DECIMAL_RE.fullmatch(value.strip()):
            return None
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def int_param(params: Sequence[Any], index: int, rule_name: str) -> int:
    """
    Integer parameter at index.

    Raises:
        ValidationException: If the parameter is missing or not an integer
    """
    raw = param(params, index)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationException(f"'{rule_name}' parameter {index} must be an integer, got {raw!r}")


def number_param(params: Sequence[Any], index: int, rule_name: str) -> float:
    """
    Numeric parameter at index.

    Raises:
        ValidationException: If the parameter is missing or not a number
    """
    raw = param(params, index)
    number = to_number(raw)
    if number is None:
        raise ValidationException(f"'{rule_name}' parameter {index} must be a number, got {raw!r}")
    return number


class BaseValidator(ABC):
    """
    Abstract base class for all built-in validators.

    Validators are stateless; one instance serves every run.
    """

    @property
    @abstractmethod
    def rule_name(self) -> str:
        """Return the rule name used in rule chains."""
        pass

    @abstractmethod
    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        """
        Check one value.

        Args:
            field: Field key being validated
            record: The whole input record (field key already resolved)
            params: Rule parameters from the rule chain
            value: The value to check (a single element for list fields)

        Returns:
            True when the value passes
        """
        pass

    def __call__(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return self.validate(field, record, params, value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rule={self.rule_name})"
