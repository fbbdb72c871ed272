"""
FailureRecord model representing one failed validation (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Rule name tagging input keys that have no validation rules
MISMATCH_RULE = "mismatch"


class FailureRecord(BaseModel):
    """
    Outcome of a rule chain that stopped on a failing rule.

    No message is attached; messages are resolved lazily by the formatter.

    Attributes:
        field: Field key as written in the ruleset
        value: The whole field value (not the failing list element)
        rule: Name of the rule that failed
        params: Parameters the rule was called with
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "username",
                "value": "ab",
                "rule": "min_len",
                "params": ["3"],
            }
        }
    )

    field: str
    value: Any = None
    rule: str
    params: list[Any] = Field(default_factory=list)

    @property
    def is_mismatch(self) -> bool:
        """True when the record comes from the field-mismatch pass."""
        return self.rule == MISMATCH_RULE


# An ErrorReport is an ordered list of FailureRecord, one per failed field
ErrorReport = list[FailureRecord]
