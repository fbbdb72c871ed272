"""
String validators: lengths, character classes, membership and patterns.
"""

import re
from collections.abc import Sequence
from typing import Any

from rulegate.core.exceptions import ValidationException

from .base_validator import BaseValidator, int_param, param

_ALPHA_DASH_RE = re.compile(r"(?:[^\W\d_]|[-_])+")
_ALPHA_SPACE_RE = re.compile(r"(?:[^\W_]|\s)+")
_PHP_PATTERN_RE = re.compile(r"^/(.*)/([imsx]*)$", re.DOTALL)


def _length(value: Any) -> int:
    if isinstance(value, str):
        return len(value)
    return len(str(value))


class MinLengthValidator(BaseValidator):
    """Value length must be at least params[0]."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return _length(value) >= int_param(params, 0, self.rule_name)

    @property
    def rule_name(self) -> str:
        return "min_len"


class MaxLengthValidator(BaseValidator):
    """Value length must be at most params[0]."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return _length(value) <= int_param(params, 0, self.rule_name)

    @property
    def rule_name(self) -> str:
        return "max_len"


class ExactLengthValidator(BaseValidator):
    """Value length must equal params[0]."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return _length(value) == int_param(params, 0, self.rule_name)

    @property
    def rule_name(self) -> str:
        return "exact_len"


class BetweenLengthValidator(BaseValidator):
    """Value length must be within [params[0], params[1]] inclusive."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        length = _length(value)
        return int_param(params, 0, self.rule_name) <= length <= int_param(params, 1, self.rule_name)

    @property
    def rule_name(self) -> str:
        return "between_len"


class AlphaValidator(BaseValidator):
    """Letters only (any script)."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return isinstance(value, str) and value.isalpha()

    @property
    def rule_name(self) -> str:
        return "alpha"


class AlphaNumericValidator(BaseValidator):
    """Letters and digits only."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return str(value).isalnum()

    @property
    def rule_name(self) -> str:
        return "alpha_numeric"


class AlphaDashValidator(BaseValidator):
    """Letters, dashes and underscores."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return isinstance(value, str) and _ALPHA_DASH_RE.fullmatch(value) is not None

    @property
    def rule_name(self) -> str:
        return "alpha_dash"


class AlphaSpaceValidator(BaseValidator):
    """Letters, digits and whitespace."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return _ALPHA_SPACE_RE.fullmatch(str(value)) is not None

    @property
    def rule_name(self) -> str:
        return "alpha_space"


class ContainsValidator(BaseValidator):
    """Value must be one of the parameters (case-sensitive, surrounding spaces ignored)."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        allowed = [str(p).strip() for p in params]
        return str(value).strip() in allowed

    @property
    def rule_name(self) -> str:
        return "contains"


class ContainsListValidator(BaseValidator):
    """Value must be one of the parameters, compared case-insensitively."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        allowed = [str(p).strip().lower() for p in params]
        return str(value).strip().lower() in allowed

    @property
    def rule_name(self) -> str:
        return "contains_list"


class DoesntContainListValidator(BaseValidator):
    """Value must not be any of the parameters, compared case-insensitively."""

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        denied = [str(p).strip().lower() for p in params]
        return str(value).strip().lower() not in denied

    @property
    def rule_name(self) -> str:
        return "doesnt_contain_list"


class RegexValidator(BaseValidator):
    """
    Value must match the pattern in params[0].

    Accepts plain patterns and slash-delimited ones with flags ("/^a+$/i").
    The match is a search, anchor the pattern to match the whole value.
    """

    _FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        pattern = str(param(params, 0, ""))
        flags = 0

        delimited = _PHP_PATTERN_RE.match(pattern)
        if delimited:
            pattern = delimited.group(1)
            for flag in delimited.group(2):
                flags |= self._FLAGS[flag]

        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            raise ValidationException(f"Invalid regex pattern {pattern!r}: {e}")

        return compiled.search(str(value)) is not None

    @property
    def rule_name(self) -> str:
        return "regex"
