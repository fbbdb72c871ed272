"""
Built-in validation rule implementations.

BUILTIN_VALIDATORS maps every built-in rule name to its (stateless)
validator instance; the dispatcher consults it before custom rules.
"""

from .base_validator import BaseValidator, int_param, is_empty, number_param, param, to_number
from .field_validator import EqualsFieldValidator
from .format_validator import DateValidator, EmailValidator, IpValidator, UrlValidator
from .numeric_validator import (
    FALSES,
    TRUES,
    BooleanValidator,
    FloatValidator,
    IntegerValidator,
    MaxNumericValidator,
    MinNumericValidator,
    NumericValidator,
)
from .presence_validator import RequiredFileValidator, RequiredValidator
from .string_validator import (
    AlphaDashValidator,
    AlphaNumericValidator,
    AlphaSpaceValidator,
    AlphaValidator,
    BetweenLengthValidator,
    ContainsListValidator,
    ContainsValidator,
    DoesntContainListValidator,
    ExactLengthValidator,
    MaxLengthValidator,
    MinLengthValidator,
    RegexValidator,
)

# Rules whose presence means an empty field is not skipped
REQUIRED_RULES = frozenset({"required", "required_file"})

BUILTIN_VALIDATORS: dict[str, BaseValidator] = {
    validator.rule_name: validator
    for validator in (
        RequiredValidator(),
        RequiredFileValidator(),
        ContainsValidator(),
        ContainsListValidator(),
        DoesntContainListValidator(),
        MinLengthValidator(),
        MaxLengthValidator(),
        ExactLengthValidator(),
        BetweenLengthValidator(),
        AlphaValidator(),
        AlphaNumericValidator(),
        AlphaDashValidator(),
        AlphaSpaceValidator(),
        NumericValidator(),
        IntegerValidator(),
        FloatValidator(),
        BooleanValidator(),
        MinNumericValidator(),
        MaxNumericValidator(),
        EmailValidator(),
        UrlValidator(),
        IpValidator(),
        RegexValidator(),
        DateValidator(),
        EqualsFieldValidator(),
    )
}

__all__ = [
    "BaseValidator",
    "BUILTIN_VALIDATORS",
    "REQUIRED_RULES",
    "TRUES",
    "FALSES",
    "is_empty",
    "param",
    "int_param",
    "number_param",
    "to_number",
]
