"""Prometheus metrics for monitoring score distribution, alerts and request latency"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from household_health.domain.models import FinancialHealthResult, HealthAlert

# Assessment metrics
assessment_counter = Counter(
    "household_health_assessment_total",
    "Total health assessments computed",
    ["classification"],  # Excellent | Good | Fair | Poor | Critical
)

score_histogram = Histogram(
    "household_health_score",
    "Distribution of overall health scores",
    buckets=[20, 40, 60, 80, 100],
)

alert_counter = Counter(
    "household_health_alerts_total",
    "Alerts emitted by rule and severity",
    ["rule", "severity"],
)

validation_failures_counter = Counter(
    "household_health_validation_failures_total",
    "Snapshots rejected as malformed",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def _record_alerts(alerts: Iterable[HealthAlert]) -> None:
    for alert in alerts:
        alert_counter.labels(rule=alert.id, severity=alert.severity.value).inc()


def record_assessment(result: FinancialHealthResult) -> None:
    """Record assessment metrics for monitoring score and alert distribution"""
    assessment_counter.labels(classification=result.classification.value).inc()
    score_histogram.observe(result.score)
    _record_alerts(result.alerts)
