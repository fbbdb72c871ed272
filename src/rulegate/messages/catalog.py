"""
Message catalogs.

A catalog maps rule names to message templates for one language. Catalogs
ship as YAML files under rulegate/langs/<lang>.yaml.
"""

import logging
import re
from importlib import resources

import yaml

from rulegate.core.exceptions import UnsupportedLanguageError, ValidationException

logger = logging.getLogger(__name__)

_LANG_RE = re.compile(r"[A-Za-z]{2,3}(?:[_-][A-Za-z0-9]+)?")


def _langs_dir():
    return resources.files("rulegate") / "langs"


def available_languages() -> list[str]:
    """Languages with a shipped catalog, sorted."""
    return sorted(
        entry.name[: -len(".yaml")]
        for entry in _langs_dir().iterdir()
        if entry.name.endswith(".yaml")
    )


class MessageCatalog:
    """
    Rule name -> message template lookup for one language.
    """

    def __init__(self, lang: str, messages: dict[str, str]):
        self.lang = lang
        self.messages = messages

    @classmethod
    def load(cls, lang: str) -> "MessageCatalog":
        """
        Load the catalog for a language.

        Raises:
            UnsupportedLanguageError: If no catalog file exists for lang
            ValidationException: If the file is not a mapping of strings
        """
        if not _LANG_RE.fullmatch(lang):
            raise UnsupportedLanguageError(lang)

        lang_file = _langs_dir() / f"{lang}.yaml"
        if not lang_file.is_file():
            logger.error("Message catalog not found", extra={"lang": lang})
            raise UnsupportedLanguageError(lang)

        messages = yaml.safe_load(lang_file.read_text(encoding="utf-8"))
        if not isinstance(messages, dict):
            raise ValidationException(f"Message catalog '{lang}' must be a mapping of rule -> message")

        return cls(lang, {str(rule): str(message) for rule, message in messages.items()})

    def get(self, rule: str) -> str | None:
        return self.messages.get(rule)

    def __contains__(self, rule: str) -> bool:
        return rule in self.messages
