"""
Validators that compare a field against another field of the record.
"""

from collections.abc import Sequence
from typing import Any

from rulegate.utils.paths import data_get

from .base_validator import BaseValidator, param


class EqualsFieldValidator(BaseValidator):
    """
    Value must equal the value of the field named in params[0].

    The other field is resolved with the same nested-path lookup as the
    validated one ("equalsfield,account.password").
    """

    def validate(self, field: str, record: dict[str, Any], params: Sequence[Any], value: Any) -> bool:
        other = param(params, 0)
        if other is None:
            return False
        return value == data_get(record, other)

    @property
    def rule_name(self) -> str:
        return "equalsfield"
