"""
Rule parsing, dispatch, execution and ruleset configuration.
"""

from .dispatcher import ResolvedRule, RuleDispatcher
from .engine import FieldExecutionEngine, expand_values, has_required_rule
from .parser import RuleParser
from .rule_config import RuleConfigBuilder, RuleConfigLoader, RulesetConfig

__all__ = [
    "RuleParser",
    "RuleDispatcher",
    "ResolvedRule",
    "FieldExecutionEngine",
    "expand_values",
    "has_required_rule",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "RulesetConfig",
]
