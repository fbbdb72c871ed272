"""
Prometheus metrics for rulegate

Counts validation runs and failures and times them. Metrics live on a
private registry so embedding applications decide whether to expose them.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()


validation_runs_total = Counter(
    name="rulegate_validation_runs_total",
    documentation="Total number of validate() calls",
    labelnames=["outcome"],  # outcome: passed, failed
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="rulegate_validation_failures_total",
    documentation="Total number of failure records produced",
    labelnames=["rule_name"],
    registry=REGISTRY,
)

filter_runs_total = Counter(
    name="rulegate_filter_runs_total",
    documentation="Total number of filter() calls",
    registry=REGISTRY,
)

validation_duration_seconds = Histogram(
    name="rulegate_validation_duration_seconds",
    documentation="Time spent validating one input record",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


def record_validation(passed: bool, failed_rules: list[str], duration_seconds: float) -> None:
    """
    Record one validation run.

    Args:
        passed: Whether the run produced no failure records
        failed_rules: Rule names of the failure records
        duration_seconds: Run duration
    """
    validation_runs_total.labels(outcome="passed" if passed else "failed").inc()
    for rule_name in failed_rules:
        validation_failures_total.labels(rule_name=rule_name).inc()
    validation_duration_seconds.observe(duration_seconds)


def record_filter_run() -> None:
    filter_runs_total.inc()


def get_metrics() -> bytes:
    """
    Generate metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST
