"""
Logging and metrics.
"""

from .logger import get_logger, log_operation, setup_logger
from .metrics import get_metrics, record_filter_run, record_validation

__all__ = [
    "setup_logger",
    "get_logger",
    "log_operation",
    "get_metrics",
    "record_validation",
    "record_filter_run",
]
