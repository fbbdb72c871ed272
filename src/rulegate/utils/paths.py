"""
Nested path lookup into input records.

Field keys in a ruleset may address nested structures:
"address.city", "items[0].sku" or "items.*.sku".
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")

_MISSING = object()


def split_path(key: str) -> list[str]:
    """
    Split a dotted/bracketed key into segments.

    Examples:
        >>> split_path("items[0].sku")
        ['items', '0', 'sku']
        >>> split_path("address.city")
        ['address', 'city']
    """
    normalized = _BRACKET_RE.sub(r".\1", key)
    return [segment for segment in normalized.split(".") if segment != ""]


def data_get(record: Any, key: Any, default: Any = None) -> Any:
    """
    Resolve a possibly nested key against a record.

    A direct key hit always wins, so flat keys containing dots still work.
    A "*" segment collects the rest of the path across every element and
    returns a list.

    Args:
        record: Mapping (or sequence) to look into
        key: Field key, dotted/bracketed path or integer index
        default: Value returned when the path does not resolve

    Returns:
        The resolved value or default
    """
    if isinstance(record, Mapping) and key in record:
        return record[key]

    if not isinstance(key, str):
        return default

    segments = split_path(key)
    if not segments:
        return default

    value = _walk(record, segments)
    return default if value is _MISSING else value


def _walk(current: Any, segments: list[str]) -> Any:
    for position, segment in enumerate(segments):
        if segment == "*":
            if isinstance(current, Mapping):
                items = list(current.values())
            elif _is_sequence(current):
                items = list(current)
            else:
                return _MISSING
            rest = segments[position + 1:]
            collected = [_walk(item, rest) if rest else item for item in items]
            return [item for item in collected if item is not _MISSING]

        current = _step(current, segment)
        if current is _MISSING:
            return _MISSING

    return current


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        if segment in current:
            return current[segment]
        if segment.lstrip("-").isdigit() and int(segment) in current:
            return current[int(segment)]
        return _MISSING

    if _is_sequence(current) and segment.lstrip("-").isdigit():
        index = int(segment)
        if -len(current) <= index < len(current):
            return current[index]

    return _MISSING


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
