"""
Structured JSON logging for rulegate.

Library modules log through logging.getLogger(__name__) and emit nothing
until an application installs a handler. setup_logger() installs one on
the "rulegate" logger tree; the CLI calls it on start. Rule names, field
names and languages are passed as `extra` so they become JSON keys.
"""
import logging
import os
import sys
import time
from typing import TextIO

from pythonjsonlogger import jsonlogger

ROOT_LOGGER_NAME = "rulegate"

DEFAULT_LEVEL = "WARNING"

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class RulegateJsonFormatter(jsonlogger.JsonFormatter):
    """
    One JSON object per line with timestamp, level, logger and call site
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}:{record.funcName}:{record.lineno}"


def resolve_level(level: str | None) -> int:
    """
    Map a level name to its numeric value

    Falls back to $LOG_LEVEL, then WARNING; unknown names also give WARNING.
    """
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    format_type: str = "json",
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Install a single stream handler on a logger

    Args:
        name: Logger name, the whole rulegate tree by default
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text"
        stream: Output stream, stderr by default so stdout stays free for CLI output

    Returns:
        The configured logger
    """
    log_level = resolve_level(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    if format_type == "json":
        handler.setFormatter(RulegateJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Logger inside the rulegate tree

    "__main__" and other outside names are nested under "rulegate." so the
    handler from setup_logger() applies to them.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class log_operation:
    """
    Log the start, end and duration of a block

    Usage:
        with log_operation("Validating input", logger=logger, rules="signup.yaml"):
            validation.run(data)
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.started = 0.0

    def _extra(self, **fields) -> dict:
        return {"operation": self.operation_name, **self.extra_fields, **fields}

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.info(f"Starting: {self.operation_name}", extra=self._extra())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = round(time.perf_counter() - self.started, 4)

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra=self._extra(duration_seconds=duration, status="success"),
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra=self._extra(
                    duration_seconds=duration,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
            )
        return False
