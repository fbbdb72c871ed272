"""
Core data models for the rule engine.

All models use Pydantic for runtime validation and type safety.
"""

from .failure_record import MISMATCH_RULE, ErrorReport, FailureRecord
from .rule_spec import RuleSpec

__all__ = [
    "RuleSpec",
    "FailureRecord",
    "ErrorReport",
    "MISMATCH_RULE",
]
