"""
Error message formatting.

Turns FailureRecord entries into human-readable messages:

1. pick a template: per-field-per-rule override, then the context's rule
   override, then the language catalog
2. substitute {field}, {param} and {param[i]} in a single literal pass

Markup rendering is a separate function so the plain accessors never embed
presentation.
"""

import html
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from rulegate.core.context import ValidationContext
from rulegate.core.exceptions import MissingMessageError
from rulegate.core.models import ErrorReport, FailureRecord

from .catalog import MessageCatalog

logger = logging.getLogger(__name__)

Replacements = dict[str, str]
Transformer = Callable[[Replacements], Replacements]

_WORD_START_RE = re.compile(r"(^|\s)(\S)")


def ucwords(text: str) -> str:
    """Upper-case the first character of each word, leaving the rest untouched."""
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text)


def substitute(template: str, replacements: Mapping[str, str]) -> str:
    """
    Replace every placeholder in one pass.

    Replaced text is never scanned again, so a value containing "{field}"
    stays as written. Longer placeholders win over their prefixes.
    """
    if not replacements:
        return template
    keys = sorted(replacements, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda m: replacements[m.group(0)], template)


class ErrorFormatter:
    """
    Resolves and renders messages for failure records.

    Args:
        context: Supplies readable field names and rule message overrides
        catalog: Language catalog consulted last
        fields_error_messages: Field -> rule -> template, checked first
    """

    def __init__(
        self,
        context: ValidationContext,
        catalog: MessageCatalog,
        fields_error_messages: Mapping[str, Mapping[str, str]] | None = None,
    ):
        self.context = context
        self.catalog = catalog
        self.fields_error_messages = fields_error_messages or {}

    def resolve_message(self, field: str, rule: str) -> str:
        """
        Find the template for a failed rule.

        Raises:
            MissingMessageError: If no template exists anywhere
        """
        field_messages = self.fields_error_messages.get(field) or {}
        for key in (rule, f"validate_{rule}"):
            if key in field_messages:
                return field_messages[key]

        if rule in self.context.error_messages:
            return self.context.error_messages[rule]

        message = self.catalog.get(rule)
        if message is not None:
            return message

        logger.error("No error message for rule", extra={"rule_name": rule, "lang": self.catalog.lang})
        raise MissingMessageError(rule)

    def readable_name(self, field: str) -> str:
        """
        Label for a field: its registered name, else a prettified key.

        "street_name" -> "Street Name"
        """
        if field in self.context.field_names:
            return self.context.field_names[field]

        name = str(field)
        for char in self.context.settings.field_chars_to_spaces:
            name = name.replace(char, " ")
        return ucwords(name)

    def format(self, record: FailureRecord, transformer: Transformer | None = None) -> str:
        """
        Render one failure record as a message.

        Args:
            record: The failure to describe
            transformer: Optional hook receiving and returning the replacement map

        Returns:
            The message with placeholders substituted
        """
        template = self.resolve_message(record.field, record.rule)
        params = [self._param_label(p) for p in record.params]

        replacements: Replacements = {
            "{field}": self.readable_name(record.field),
            "{param}": ", ".join(params),
        }
        for index, value in enumerate(params):
            replacements[f"{{param[{index}]}}"] = value

        if transformer is not None:
            replacements = transformer(replacements)

        return substitute(template, replacements)

    def readable_errors(self, report: ErrorReport) -> list[str]:
        """Messages for every failure, in report order."""
        return [self.format(record) for record in report]

    def errors_by_field(self, report: ErrorReport) -> dict[str, str]:
        """Field -> message."""
        return {record.field: self.format(record) for record in report}

    def render_markup(
        self,
        report: ErrorReport,
        field_class: str = "rulegate-field",
        error_class: str = "rulegate-error-message",
    ) -> str:
        """
        Render failures as HTML.

        Each message is wrapped in <span class="error_class"> and the field
        label inside it in <span class="field_class">.
        """
        def wrap_field(replacements: Replacements) -> Replacements:
            label = html.escape(replacements["{field}"])
            replacements["{field}"] = f'<span class="{html.escape(field_class)}">{label}</span>'
            return replacements

        return "".join(
            f'<span class="{html.escape(error_class)}">{self.format(record, wrap_field)}</span>'
            for record in report
        )

    def _param_label(self, value: Any) -> str:
        if isinstance(value, str) and value in self.context.field_names:
            return self.context.field_names[value]
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)
