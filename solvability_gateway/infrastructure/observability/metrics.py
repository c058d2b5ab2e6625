"""Prometheus metrics for monitoring score distribution and recommendations"""

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_counter = Counter(
    "solvability_assessment_total",
    "Total solvability assessments computed",
    ["recommendation"],  # accept | accept-with-guarantor | review | reject
)

risk_level_counter = Counter(
    "solvability_risk_level_total",
    "Assessments by risk level",
    ["risk_level"],
)

total_score_histogram = Histogram(
    "solvability_total_score",
    "Distribution of total solvability scores",
    buckets=[10, 20, 30, 40, 50, 60, 75, 90, 100],
)

assessment_warning_counter = Counter(
    "solvability_warning_total",
    "Warnings raised by assessments",
    ["warning"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(total_score: int, risk_level: str, recommendation: str, warning_names: list[str]) -> None:
    """Record score distribution and recommendation mix"""
    assessment_counter.labels(recommendation=recommendation).inc()
    risk_level_counter.labels(risk_level=risk_level).inc()
    total_score_histogram.observe(total_score)

    for name in warning_names:
        assessment_warning_counter.labels(warning=name).inc()
