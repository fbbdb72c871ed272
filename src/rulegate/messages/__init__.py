"""
Message catalogs and error formatting.
"""

from .catalog import MessageCatalog, available_languages
from .formatter import ErrorFormatter, substitute, ucwords

__all__ = [
    "MessageCatalog",
    "available_languages",
    "ErrorFormatter",
    "substitute",
    "ucwords",
]
