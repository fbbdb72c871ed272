"""
Field execution engine.

Applies filter chains and validation chains to an input record, one field at
a time. Validation stops a field's chain on its first failing rule, so the
error report holds at most one FailureRecord per field; filtering is a
pipeline where each filter's output feeds the next.
"""

import logging
import time
from collections.abc import Mapping
from typing import Any, Literal

from rulegate.core.context import ValidationContext
from rulegate.core.models import MISMATCH_RULE, FailureRecord, RuleSpec
from rulegate.core.validators import REQUIRED_RULES, is_empty
from rulegate.observability.metrics import record_filter_run, record_validation
from rulegate.utils.paths import data_get

from .dispatcher import RuleDispatcher
from .parser import RuleParser

logger = logging.getLogger(__name__)


def has_required_rule(rules: list[RuleSpec]) -> bool:
    """True if the chain contains a required-type rule."""
    return any(rule.name in REQUIRED_RULES for rule in rules)


def expand_values(value: Any) -> list[Any]:
    """
    Values a rule is applied to: every element of a list, or the value itself.

    An empty list is presented once as a whole so required-type rules can
    reject it.
    """
    if isinstance(value, (list, tuple)) and len(value) > 0:
        return list(value)
    return [value]


class FieldExecutionEngine:
    """
    Runs parsed rule chains over input records.

    Parsing happens on every call; nothing is cached between runs.
    """

    def __init__(
        self,
        context: ValidationContext,
        parser: RuleParser | None = None,
        dispatcher: RuleDispatcher | None = None,
    ):
        self.context = context
        self.parser = parser or RuleParser(context.settings)
        self.dispatcher = dispatcher or RuleDispatcher(context)

    def validate(self, input_data: Mapping[str, Any], ruleset: Mapping[str, Any]) -> Literal[True] | list[FailureRecord]:
        """
        Validate a record against a ruleset.

        Args:
            input_data: Field name -> value
            ruleset: Field name (possibly a nested path) -> rule chain

        Returns:
            True when every field passes, otherwise the list of FailureRecord

        Raises:
            UnknownRuleError: If a chain names a rule that does not exist
        """
        start_time = time.perf_counter()
        record = dict(input_data)
        errors: list[FailureRecord] = []

        for field, raw_rules in ruleset.items():
            record[field] = data_get(record, field)
            rules = self.parser.parse(raw_rules)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Validating field", extra={"field_name": field, "rules": [rule.name for rule in rules]})

            failure = self.validate_field(field, record, rules)
            if failure is not None:
                errors.append(failure)

        record_validation(
            passed=not errors,
            failed_rules=[error.rule for error in errors],
            duration_seconds=time.perf_counter() - start_time,
        )

        return errors if errors else True

    def validate_field(self, field: str, record: dict[str, Any], rules: list[RuleSpec]) -> FailureRecord | None:
        """
        Run one field's chain and return its first failure, if any.

        Args:
            field: Field key (record[field] already holds the resolved value)
            record: The working copy of the input record
            rules: Parsed rule chain

        Returns:
            FailureRecord for the first failing rule, or None
        """
        value = record.get(field)

        if not has_required_rule(rules) and is_empty(value):
            logger.debug("Skipping empty optional field", extra={"field_name": field})
            return None

        for rule in rules:
            for item in expand_values(value):
                if not self.dispatcher.call_validator(rule.name, field, record, rule.params, item):
                    logger.debug(
                        "Validation failed",
                        extra={"field_name": field, "rule_name": rule.name},
                    )
                    return FailureRecord(field=field, value=value, rule=rule.name, params=list(rule.params))

        return None

    def filter(self, input_data: Mapping[str, Any], filterset: Mapping[str, Any]) -> dict[str, Any]:
        """
        Filter a record.

        Fields missing from the input are skipped. List values are filtered
        element by element and mapping values entry by entry, keeping their
        keys. The caller's input is left untouched.

        Args:
            input_data: Field name -> value
            filterset: Field name -> filter chain

        Returns:
            A new record with filtered values

        Raises:
            UnknownRuleError: If a chain names a filter that does not exist
        """
        record = dict(input_data)

        for field, raw_filters in filterset.items():
            if field not in record:
                continue

            for rule in self.parser.parse(raw_filters):
                value = record[field]
                if isinstance(value, (list, tuple)):
                    record[field] = [self.dispatcher.call_filter(rule.name, item, rule.params) for item in value]
                elif isinstance(value, Mapping):
                    record[field] = {
                        key: self.dispatcher.call_filter(rule.name, item, rule.params) for key, item in value.items()
                    }
                else:
                    record[field] = self.dispatcher.call_filter(rule.name, value, rule.params)

        record_filter_run()
        return record

    def check_fields(self, data: Mapping[str, Any], ruleset: Mapping[str, Any]) -> list[FailureRecord]:
        """
        Report every input key that has no validation rules.

        This is a configuration-drift check run as its own pass after
        validation; its records carry the "mismatch" rule name.
        """
        mismatched = [field for field in data if field not in ruleset]
        if mismatched:
            logger.debug("Fields without validation rules", extra={"fields": mismatched})
        return [FailureRecord(field=str(field), value=data[field], rule=MISMATCH_RULE) for field in mismatched]
