"""
Validation context.

Holds the state a rule run depends on besides its input:
custom validators and filters, readable field names, rule message overrides
and the fallback function namespace used by filters. A context is created
by the caller and handed to the engine; a shared default context exists for
the class-level convenience API.

Registrations are expected at setup time. Writes are serialized with a lock,
reads are not, so a context is safe to share once configured.
"""

import builtins
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from rulegate.core.config import EngineSettings
from rulegate.core.exceptions import DuplicateRuleError
from rulegate.core.filters import BUILTIN_FILTERS
from rulegate.core.validators import BUILTIN_VALIDATORS

logger = logging.getLogger(__name__)

ValidatorCallback = Callable[[str, dict[str, Any], list[Any], Any], Any]
FilterCallback = Callable[[Any, list[Any]], Any]

# Builtins that must never be reachable from a rule chain
_UNSAFE_BUILTINS = frozenset({
    "eval", "exec", "compile", "open", "input", "breakpoint", "help", "exit", "quit",
    "globals", "locals", "vars", "getattr", "setattr", "delattr", "memoryview",
})


def default_function_namespace() -> dict[str, Callable[..., Any]]:
    """
    General-purpose functions usable as filters by bare name.

    Python builtins ("round", "abs") take precedence over str methods
    ("title", "zfill", "replace"). Each is called as func(value, *params).
    """
    namespace: dict[str, Callable[..., Any]] = {}

    for name in dir(str):
        if not name.startswith("_"):
            namespace[name] = getattr(str, name)

    for name in dir(builtins):
        obj = getattr(builtins, name)
        if name.startswith("_") or name in _UNSAFE_BUILTINS:
            continue
        if callable(obj) and not (isinstance(obj, type) and issubclass(obj, BaseException)):
            namespace[name] = obj

    return namespace


class ValidationContext:
    """
    Registries and settings shared by every run that uses this context.

    Attributes:
        settings: Delimiters, field-name separators and default language
        validators: Custom validator name -> callback
        filters: Custom filter name -> callback
        field_names: Field key -> readable label
        error_messages: Rule name -> message template (layered over the catalog)
        functions: Fallback namespace for filters with no built-in or custom match
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
    ):
        self.settings = settings or EngineSettings()
        self.validators: dict[str, ValidatorCallback] = {}
        self.filters: dict[str, FilterCallback] = {}
        self.field_names: dict[str, str] = {}
        self.error_messages: dict[str, str] = {}
        self.functions: dict[str, Callable[..., Any]] = (
            dict(functions) if functions is not None else default_function_namespace()
        )
        self._lock = threading.RLock()

    def add_validator(self, rule: str, callback: ValidatorCallback, error_message: str) -> None:
        """
        Register a custom validator and its error message template.

        The callback is called as callback(field, record, params, value) and
        fails the field by returning False (or a list).

        Raises:
            DuplicateRuleError: If the name is a built-in or already registered
        """
        if not callable(callback):
            raise ValueError("Validator callback must be callable")

        with self._lock:
            if rule in BUILTIN_VALIDATORS or rule in self.validators:
                logger.error("Duplicate validator registration", extra={"rule_name": rule})
                raise DuplicateRuleError(rule, "validator")
            self.validators[rule] = callback
            self.error_messages[rule] = error_message

        logger.debug("Registered custom validator", extra={"rule_name": rule})

    def add_filter(self, rule: str, callback: FilterCallback) -> None:
        """
        Register a custom filter, called as callback(value, params).

        Raises:
            DuplicateRuleError: If the name is a built-in or already registered
        """
        if not callable(callback):
            raise ValueError("Filter callback must be callable")

        with self._lock:
            if rule in BUILTIN_FILTERS or rule in self.filters:
                logger.error("Duplicate filter registration", extra={"rule_name": rule})
                raise DuplicateRuleError(rule, "filter")
            self.filters[rule] = callback

        logger.debug("Registered custom filter", extra={"rule_name": rule})

    def set_field_name(self, field: str, readable_name: str) -> None:
        with self._lock:
            self.field_names[field] = readable_name

    def set_field_names(self, names: Mapping[str, str]) -> None:
        with self._lock:
            self.field_names.update(names)

    def set_error_message(self, rule: str, message: str) -> None:
        with self._lock:
            self.error_messages[rule] = message

    def set_error_messages(self, messages: Mapping[str, str]) -> None:
        with self._lock:
            self.error_messages.update(messages)


_default_context: ValidationContext | None = None
_default_lock = threading.Lock()


def default_context() -> ValidationContext:
    """Return the shared context, creating it from the environment on first use."""
    global _default_context
    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = ValidationContext(EngineSettings.from_env())
    return _default_context


def reset_default_context(context: ValidationContext | None = None) -> ValidationContext:
    """Replace the shared context (a fresh one when none is given) and return it."""
    global _default_context
    with _default_lock:
        _default_context = context or ValidationContext(EngineSettings.from_env())
    return _default_context
