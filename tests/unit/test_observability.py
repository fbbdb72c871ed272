"""
Unit tests for logging and metrics.
"""

import io
import json
import logging

import pytest

from rulegate.core.rules import FieldExecutionEngine
from rulegate.observability import get_logger, get_metrics, log_operation, setup_logger
from rulegate.observability.metrics import REGISTRY, get_content_type


@pytest.fixture
def log_stream():
    """Capture the rulegate logger tree as JSON lines"""
    stream = io.StringIO()
    setup_logger(level="DEBUG", format_type="json", stream=stream)
    yield stream
    logger = logging.getLogger("rulegate")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestLogging:
    """Tests for structured log output"""

    def test_json_fields(self, log_stream):
        get_logger("tests").info("hello", extra={"rule_name": "required"})

        entry = json.loads(log_stream.getvalue().splitlines()[-1])

        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "rulegate.tests"
        assert entry["rule_name"] == "required"
        assert "timestamp" in entry

    def test_get_logger_keeps_rulegate_names(self):
        assert get_logger("rulegate.core").name == "rulegate.core"
        assert get_logger("__main__").name == "rulegate.__main__"

    def test_log_operation_success(self, log_stream):
        with log_operation("Checking", logger=get_logger("tests"), rules="r.yaml"):
            pass

        entries = [json.loads(line) for line in log_stream.getvalue().splitlines()]

        assert entries[-1]["message"] == "Completed: Checking"
        assert entries[-1]["status"] == "success"
        assert entries[-1]["rules"] == "r.yaml"

    def test_log_operation_failure_reraises(self, log_stream):
        with pytest.raises(RuntimeError):
            with log_operation("Checking", logger=get_logger("tests")):
                raise RuntimeError("boom")

        entry = json.loads(log_stream.getvalue().splitlines()[-1])

        assert entry["status"] == "error"
        assert entry["error_type"] == "RuntimeError"

    def test_engine_debug_logs(self, log_stream, context):
        FieldExecutionEngine(context).validate({"x": ""}, {"x": "required"})

        entries = [json.loads(line) for line in log_stream.getvalue().splitlines()]

        assert any(entry["message"] == "Validation failed" and entry["field_name"] == "x" for entry in entries)


class TestMetrics:
    """Tests for Prometheus counters"""

    def test_validation_runs_are_counted(self, context):
        engine = FieldExecutionEngine(context)
        passed_before = sample("rulegate_validation_runs_total", {"outcome": "passed"})
        failed_before = sample("rulegate_validation_runs_total", {"outcome": "failed"})
        required_before = sample("rulegate_validation_failures_total", {"rule_name": "required"})

        engine.validate({"x": "ok"}, {"x": "required"})
        engine.validate({}, {"x": "required"})

        assert sample("rulegate_validation_runs_total", {"outcome": "passed"}) == passed_before + 1
        assert sample("rulegate_validation_runs_total", {"outcome": "failed"}) == failed_before + 1
        assert sample("rulegate_validation_failures_total", {"rule_name": "required"}) == required_before + 1

    def test_filter_runs_are_counted(self, context):
        before = sample("rulegate_filter_runs_total")

        FieldExecutionEngine(context).filter({"x": " a "}, {"x": "trim"})

        assert sample("rulegate_filter_runs_total") == before + 1

    def test_exposition(self):
        assert b"rulegate_validation_runs_total" in get_metrics()
        assert get_content_type().startswith("text/plain")
