"""
Rule grammar parser.

Turns a field's rule chain, written either as a delimited string
("required|between_len,3;8") or as a structured list
(["required", ["between_len", [3, 8]]]), into an ordered list of RuleSpec.
Purely syntactic: rule names are not checked here.
"""

from collections.abc import Mapping
from typing import Any

from rulegate.core.config import EngineSettings
from rulegate.core.exceptions import ValidationException
from rulegate.core.models import RuleSpec

RuleEntry = str | tuple | list | RuleSpec


class RuleParser:
    """
    Parses rule chains using the delimiters of the given settings.
    """

    def __init__(self, settings: EngineSettings | None = None):
        self.settings = settings or EngineSettings()

    def parse(self, chain: Any) -> list[RuleSpec]:
        """
        Parse a whole rule chain.

        Args:
            chain: Delimited string, list of entries, or mapping of name -> params

        Returns:
            RuleSpec list in declaration order
        """
        return [self.parse_rule(entry) for entry in self.parse_chain(chain)]

    def parse_chain(self, chain: Any) -> list[RuleEntry]:
        """
        Split a rule chain into its raw entries without parsing parameters.

        Args:
            chain: Delimited string, list of entries, or mapping of name -> params

        Returns:
            List of raw entries (strings, (name, params) pairs or RuleSpec)

        Raises:
            ValidationException: If the chain is neither a string, list nor mapping
        """
        if isinstance(chain, RuleSpec):
            return [chain]

        if isinstance(chain, str):
            return [entry for entry in chain.split(self.settings.rules_delimiter) if entry != ""]

        if isinstance(chain, Mapping):
            return [name if params is None else (name, params) for name, params in chain.items()]

        if isinstance(chain, (list, tuple)):
            entries: list[RuleEntry] = []
            for entry in chain:
                if isinstance(entry, (list, tuple)) and len(entry) == 1:
                    entries.append(entry[0])
                elif isinstance(entry, (list, tuple)) and len(entry) > 2:
                    # ["between_len", 3, 8] is the same as ["between_len", [3, 8]]
                    entries.append((entry[0], list(entry[1:])))
                else:
                    entries.append(entry)
            return entries

        raise ValidationException(f"Unsupported rule chain type: {type(chain).__name__}")

    def parse_rule(self, entry: RuleEntry) -> RuleSpec:
        """
        Parse a single rule entry.

        Args:
            entry: "name", "name,param", "name,p1;p2", (name, params) or RuleSpec

        Returns:
            RuleSpec with params always given as a sequence
        """
        if isinstance(entry, RuleSpec):
            return entry

        if isinstance(entry, (list, tuple)):
            if not entry:
                raise ValidationException("Empty structured rule entry")
            name = entry[0]
            raw_params = entry[1] if len(entry) > 1 else ()
            return RuleSpec(name=str(name), params=self._normalize_params(raw_params))

        if not isinstance(entry, str):
            raise ValidationException(f"Unsupported rule entry type: {type(entry).__name__}")

        if self.settings.parameters_delimiter not in entry:
            return RuleSpec(name=entry)

        name, suffix = entry.split(self.settings.parameters_delimiter, 1)
        return RuleSpec(name=name, params=self._split_suffix(suffix))

    def render(self, chain: list[RuleSpec]) -> str:
        """
        Render parsed rules back into the delimited string form.

        Parameters are stringified; a multi-parameter rule uses the
        parameter-array delimiter so the output re-parses to the same chain.
        The string form cannot escape delimiters, so a rule name or parameter
        containing one has no rendering.

        Raises:
            ValidationException: If a rule name or parameter contains a delimiter
        """
        delimiters = (
            self.settings.rules_delimiter,
            self.settings.parameters_delimiter,
            self.settings.parameters_array_delimiter,
        )
        rendered = []
        for rule in chain:
            for text in (rule.name, *(str(p) for p in rule.params)):
                if any(delimiter in text for delimiter in delimiters):
                    raise ValidationException(f"Rule '{rule.name}' cannot be rendered: {text!r} contains a delimiter")
            if not rule.params:
                rendered.append(rule.name)
                continue
            joined = self.settings.parameters_array_delimiter.join(str(p) for p in rule.params)
            rendered.append(f"{rule.name}{self.settings.parameters_delimiter}{joined}")
        return self.settings.rules_delimiter.join(rendered)

    def _split_suffix(self, suffix: str) -> tuple[str, ...]:
        if self.settings.parameters_array_delimiter in suffix:
            return tuple(suffix.split(self.settings.parameters_array_delimiter))
        return tuple(suffix.split(self.settings.parameters_delimiter))

    def _normalize_params(self, raw: Any) -> tuple[Any, ...]:
        if raw is None:
            return ()
        if isinstance(raw, (list, tuple)):
            return tuple(raw)
        if isinstance(raw, str) and self.settings.parameters_array_delimiter in raw:
            return tuple(raw.split(self.settings.parameters_array_delimiter))
        return (raw,)
