"""
Configuration errors raised by the rule engine.

Bad input data never raises: it is reported through FailureRecord entries.
Everything here signals a program or configuration bug and aborts the call.
"""


class ValidationException(Exception):
    """Base class for rule engine configuration errors."""
    pass


class UnsupportedLanguageError(ValidationException):
    """Raised when no message catalog exists for the requested language."""

    def __init__(self, lang: str):
        self.lang = lang
        super().__init__(f"'{lang}' language is not supported.")


class UnknownRuleError(ValidationException):
    """Raised when a rule name resolves to no validator or filter."""

    def __init__(self, rule_name: str, kind: str = "validator"):
        self.rule_name = rule_name
        self.kind = kind
        super().__init__(f"'{rule_name}' {kind} does not exist.")


class DuplicateRuleError(ValidationException):
    """Raised when registering a name that is already a built-in or custom rule."""

    def __init__(self, rule_name: str, kind: str = "validator"):
        self.rule_name = rule_name
        self.kind = kind
        super().__init__(f"'{rule_name}' {kind} is already defined.")


class MissingMessageError(ValidationException):
    """Raised when a failed rule has no error message template anywhere."""

    def __init__(self, rule_name: str):
        self.rule_name = rule_name
        super().__init__(f"'{rule_name}' validator does not have an error message.")
