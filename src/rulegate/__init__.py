"""
rulegate: declarative filtering and validation of input records.

Rule chains are written as delimited strings ("required|max_len,16") or as
structured lists (["required", ["max_len", 16]]); filters run first as a
pipeline, validators then stop each field on its first failure.
"""

from rulegate.core.config import EngineSettings
from rulegate.core.context import ValidationContext, default_context, reset_default_context
from rulegate.core.exceptions import (
    DuplicateRuleError,
    MissingMessageError,
    UnknownRuleError,
    UnsupportedLanguageError,
    ValidationException,
)
from rulegate.core.models import MISMATCH_RULE, FailureRecord, RuleSpec
from rulegate.validation import Validation

__version__ = "1.0.0"

__all__ = [
    "Validation",
    "ValidationContext",
    "EngineSettings",
    "default_context",
    "reset_default_context",
    "RuleSpec",
    "FailureRecord",
    "MISMATCH_RULE",
    "ValidationException",
    "UnsupportedLanguageError",
    "UnknownRuleError",
    "DuplicateRuleError",
    "MissingMessageError",
]
