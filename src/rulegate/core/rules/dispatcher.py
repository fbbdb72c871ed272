"""
Rule dispatcher.

Resolves a rule name to its implementation through explicit lookup tables,
in a fixed order that registration timing cannot change:

- validators: built-in catalog, then custom registry, else UnknownRuleError
- filters: built-in catalog, then custom registry, then the context's
  fallback function namespace, else UnknownRuleError

Validators have no function fallback: an arbitrary function is not a
predicate.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from rulegate.core.context import ValidationContext
from rulegate.core.exceptions import UnknownRuleError
from rulegate.core.filters import BUILTIN_FILTERS
from rulegate.core.validators import BUILTIN_VALIDATORS

logger = logging.getLogger(__name__)


class ResolvedRule(BaseModel):
    """
    A rule name bound to the implementation that will run it.

    Attributes:
        name: Rule name as written in the chain
        kind: "validator" or "filter"
        origin: Where the implementation was found
        func: The implementation
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    kind: Literal["validator", "filter"]
    origin: Literal["builtin", "custom", "fallback"]
    func: Callable[..., Any]


class RuleDispatcher:
    """
    Looks up and invokes validators and filters for one context.
    """

    def __init__(self, context: ValidationContext):
        self.context = context

    def resolve_validator(self, name: str) -> ResolvedRule:
        """
        Resolve a validator name.

        Raises:
            UnknownRuleError: If neither a built-in nor a custom validator matches
        """
        if name in BUILTIN_VALIDATORS:
            return ResolvedRule(name=name, kind="validator", origin="builtin", func=BUILTIN_VALIDATORS[name])

        if name in self.context.validators:
            return ResolvedRule(name=name, kind="validator", origin="custom", func=self.context.validators[name])

        logger.error("Unknown validator", extra={"rule_name": name})
        raise UnknownRuleError(name, "validator")

    def resolve_filter(self, name: str) -> ResolvedRule:
        """
        Resolve a filter name.

        Raises:
            UnknownRuleError: If no built-in, custom or fallback function matches
        """
        if name in BUILTIN_FILTERS:
            return ResolvedRule(name=name, kind="filter", origin="builtin", func=BUILTIN_FILTERS[name])

        if name in self.context.filters:
            return ResolvedRule(name=name, kind="filter", origin="custom", func=self.context.filters[name])

        if name in self.context.functions:
            return ResolvedRule(name=name, kind="filter", origin="fallback", func=self.context.functions[name])

        logger.error("Unknown filter", extra={"rule_name": name})
        raise UnknownRuleError(name, "filter")

    def call_validator(
        self,
        name: str,
        field: str,
        record: dict[str, Any],
        params: Sequence[Any],
        value: Any,
    ) -> bool:
        """
        Run a validator on one value.

        Returns:
            True when the value passes. A result of False, or of any list
            (legacy structured failure), counts as a failure.
        """
        rule = self.resolve_validator(name)
        result = rule.func(field, record, list(params), value)
        return not (result is False or isinstance(result, list))

    def call_filter(self, name: str, value: Any, params: Sequence[Any]) -> Any:
        """
        Run a filter on one value and return the new value.

        Builtin and custom filters receive the parameter list. A fallback
        function is called as func(value, *params) with the parameters as
        parsed: the delimited syntax yields strings, so "round,2" calls
        round(value, "2") and raises TypeError. Use the structured syntax
        ([["round", 2]]) to pass typed arguments.
        """
        rule = self.resolve_filter(name)
        if rule.origin == "fallback":
            return rule.func(value, *params)
        return rule.func(value, list(params))
