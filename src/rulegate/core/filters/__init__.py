"""
Built-in filter implementations.
"""

from .builtin_filters import BASIC_TAGS, BUILTIN_FILTERS, EN_NOISE_WORDS, FilterFunc

__all__ = [
    "BUILTIN_FILTERS",
    "BASIC_TAGS",
    "EN_NOISE_WORDS",
    "FilterFunc",
]
