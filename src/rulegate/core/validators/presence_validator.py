"""
Required-type validators: presence of a value or an uploaded file.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .base_validator import BaseValidator, is_empty


class RequiredValidator(BaseValidator):
    """
    Fails if the value is None, an empty string or an empty list.

    Its presence in a chain also disables the skip of empty optional fields.
    """

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        return not is_empty(value)

    @property
    def rule_name(self) -> str:
        return "required"


class RequiredFileValidator(BaseValidator):
    """
    Validates an uploaded file descriptor.

    The value must be a mapping with a non-empty "name" and an "error" code
    of 0 (or no "error" key at all).
    """

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        if is_empty(value.get("name")):
            return False
        return value.get("error", 0) in (0, "0", None)

    @property
    def rule_name(self) -> str:
        return "required_file"
