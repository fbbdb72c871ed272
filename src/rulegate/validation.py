"""
Validation orchestrator.

Validation owns the validation and filter rulesets of one instance and runs
filtering then validation over whole input records. Bad input is reported
as data (errors(), get_readable_errors(), get_errors()); configuration
problems raise ValidationException subclasses.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, Literal

from rulegate.core.context import ValidationContext, default_context
from rulegate.core.models import FailureRecord
from rulegate.core.rules import FieldExecutionEngine
from rulegate.core.validators import is_empty as _is_empty
from rulegate.messages import ErrorFormatter, MessageCatalog

logger = logging.getLogger(__name__)


class Validation:
    """
    Filters and validates input records against configured rulesets.

    Usage:
        validation = Validation()
        validation.validation_rules({"username": "required|alpha_numeric|max_len,16"})
        validation.filter_rules({"username": "trim|lower_case"})

        data = validation.run(form_data)
        if data is False:
            print(validation.get_readable_errors())
    """

    _instance: "Validation | None" = None
    _instance_lock = threading.Lock()

    def __init__(self, lang: str | None = None, context: ValidationContext | None = None):
        """
        Args:
            lang: Message catalog language (defaults to the context setting)
            context: Registries to use (defaults to the shared context)

        Raises:
            UnsupportedLanguageError: If no catalog exists for lang
        """
        self.context = context or default_context()
        self.lang = lang or self.context.settings.language
        self.catalog = MessageCatalog.load(self.lang)
        self.engine = FieldExecutionEngine(self.context)

        self._validation_rules: dict[str, Any] = {}
        self._filter_rules: dict[str, Any] = {}
        self._fields_error_messages: dict[str, dict[str, str]] = {}
        self._errors: list[FailureRecord] = []

    # Shared instance and class-level API

    @classmethod
    def get_instance(cls) -> "Validation":
        """Return the shared instance bound to the shared context."""
        with cls._instance_lock:
            if cls._instance is None or cls._instance.context is not default_context():
                cls._instance = cls()
            return cls._instance

    @classmethod
    def is_valid(
        cls,
        data: Mapping[str, Any],
        validators: Mapping[str, Any],
        fields_error_messages: Mapping[str, Mapping[str, str]] | None = None,
    ) -> Literal[True] | list[str]:
        """
        One-shot validation on the shared instance.

        Returns:
            True, or the list of readable error messages
        """
        validation = cls.get_instance()
        validation.validation_rules(validators)
        validation.set_fields_error_messages(fields_error_messages or {})

        if validation.run(data) is False:
            return validation.get_readable_errors()

        return True

    @classmethod
    def filter_input(cls, data: Mapping[str, Any], filters: Mapping[str, Any]) -> dict[str, Any]:
        """One-shot filtering on the shared instance."""
        return cls.get_instance().filter(data, filters)

    @staticmethod
    def add_validator(rule: str, callback: Callable[..., Any], error_message: str) -> None:
        """Register a custom validator on the shared context."""
        default_context().add_validator(rule, callback, error_message)

    @staticmethod
    def add_filter(rule: str, callback: Callable[..., Any]) -> None:
        """Register a custom filter on the shared context."""
        default_context().add_filter(rule, callback)

    @staticmethod
    def set_field_name(field: str, readable_name: str) -> None:
        default_context().set_field_name(field, readable_name)

    @staticmethod
    def set_field_names(names: Mapping[str, str]) -> None:
        default_context().set_field_names(names)

    @staticmethod
    def set_error_message(rule: str, message: str) -> None:
        default_context().set_error_message(rule, message)

    @staticmethod
    def set_error_messages(messages: Mapping[str, str]) -> None:
        default_context().set_error_messages(messages)

    @staticmethod
    def is_empty(value: Any) -> bool:
        """An empty value is None, an empty string or an empty list."""
        return _is_empty(value)

    @staticmethod
    def field(key: Any, array: Mapping[Any, Any], default: Any = None) -> Any:
        """Value of key in array, or default when missing or None."""
        value = array.get(key)
        return default if value is None else value

    # Ruleset accessors

    def validation_rules(self, rules: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Get the validation ruleset, or replace it when rules are given."""
        if rules:
            self._validation_rules = dict(rules)
        return self._validation_rules

    def filter_rules(self, rules: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Get the filter ruleset, or replace it when rules are given."""
        if rules:
            self._filter_rules = dict(rules)
        return self._filter_rules

    def set_fields_error_messages(
        self, fields_error_messages: Mapping[str, Mapping[str, str]]
    ) -> dict[str, dict[str, str]]:
        """Set field -> rule -> message overrides for this instance."""
        self._fields_error_messages = {field: dict(messages) for field, messages in fields_error_messages.items()}
        return self._fields_error_messages

    def rules(self, rules: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.validation_rules(rules)

    def filters(self, rules: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.filter_rules(rules)

    def messages(self, fields_error_messages: Mapping[str, Mapping[str, str]]) -> dict[str, dict[str, str]]:
        return self.set_fields_error_messages(fields_error_messages)

    # Running

    def run(self, data: Mapping[str, Any], check_fields: bool = False) -> dict[str, Any] | Literal[False]:
        """
        Filter then validate the data.

        Args:
            data: Input record
            check_fields: Also report input keys that have no validation rules

        Returns:
            The filtered data when validation passes, otherwise False
            (details via errors() and friends). Mismatch records from
            check_fields are added to errors() but do not fail the run.
        """
        filtered = self.filter(data, self.filter_rules())
        validated = self.validate(filtered, self.validation_rules())

        if check_fields:
            self._errors.extend(self.engine.check_fields(filtered, self.validation_rules()))

        if validated is not True:
            logger.debug("Run failed", extra={"failed_fields": [error.field for error in self._errors]})
            return False

        return filtered

    def validate(self, input_data: Mapping[str, Any], ruleset: Mapping[str, Any]) -> Literal[True] | list[FailureRecord]:
        """
        Validate input against a ruleset and remember the errors.

        Returns:
            True, or the list of FailureRecord (one per failed field)
        """
        result = self.engine.validate(input_data, ruleset)
        self._errors = [] if result is True else list(result)
        return result

    def filter(self, input_data: Mapping[str, Any], filterset: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a filter set and return the filtered copy."""
        return self.engine.filter(input_data, filterset)

    def sanitize(
        self,
        input_data: Mapping[str, Any],
        fields: list[str] | None = None,
        utf8_encode: bool = True,
    ) -> dict[str, Any]:
        """
        Clean raw input.

        Keeps only the given fields (all when empty) and drops missing or
        None values. Strings containing a carriage return are stripped, NUL
        characters removed, and bytes decoded to text when utf8_encode is set.
        Nested mappings and lists are sanitized recursively.
        """
        if not fields:
            fields = list(input_data.keys())

        result: dict[str, Any] = {}
        for field in fields:
            if input_data.get(field) is None:
                continue
            result[field] = self._sanitize_value(input_data[field], utf8_encode)

        return result

    def _sanitize_value(self, value: Any, utf8_encode: bool) -> Any:
        if isinstance(value, Mapping):
            return self.sanitize(value, None, utf8_encode)
        if isinstance(value, (list, tuple)):
            return [self._sanitize_value(item, utf8_encode) for item in value]

        if isinstance(value, (bytes, bytearray)):
            if not utf8_encode:
                return value
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError:
                value = bytes(value).decode("latin-1")

        if isinstance(value, str):
            if "\r" in value:
                value = value.strip()
            value = value.replace("\x00", "")

        return value

    # Errors

    def errors(self) -> list[FailureRecord]:
        """Failure records from the last run."""
        return list(self._errors)

    def formatter(self) -> ErrorFormatter:
        return ErrorFormatter(self.context, self.catalog, self._fields_error_messages)

    def get_readable_errors(
        self,
        convert_to_string: bool = False,
        field_class: str = "rulegate-field",
        error_class: str = "rulegate-error-message",
    ) -> list[str] | str:
        """
        Human-readable messages for the last run.

        Args:
            convert_to_string: Return one HTML string instead of a list
            field_class: CSS class of the field label span (HTML only)
            error_class: CSS class of each message span (HTML only)

        Raises:
            MissingMessageError: If a failed rule has no message template
        """
        if not self._errors:
            return "" if convert_to_string else []

        if convert_to_string:
            return self.formatter().render_markup(self._errors, field_class, error_class)

        return self.formatter().readable_errors(self._errors)

    def get_errors(self) -> dict[str, str]:
        """Field -> message for the last run."""
        return self.formatter().errors_by_field(self._errors)
