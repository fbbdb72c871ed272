"""
Shared helpers.
"""

from .paths import data_get, split_path

__all__ = [
    "data_get",
    "split_path",
]
