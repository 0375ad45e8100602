"""Prometheus metrics for monitoring score distribution and input completeness"""

from prometheus_client import Counter, Histogram

from wellness_engine.domain.models import ScoringResult

assessment_counter = Counter(
    "wellness_assessment_total",
    "Total wellness checks processed",
    ["outcome"],  # scored | invalid
)

score_category_counter = Counter(
    "wellness_score_category_total",
    "Scored wellness checks by result category",
    ["category"],
)

ratio_unavailable_counter = Counter(
    "wellness_ratio_unavailable_total",
    "Wellness checks where an affordability ratio could not be calculated",
    ["ratio"],  # lti | dti
)

runway_days_histogram = Histogram(
    "wellness_runway_days",
    "Simulated financial runway in days (999 = income covers essentials)",
    buckets=[0, 30, 60, 90, 180, 365, 1000],
)


def record_assessment(result: ScoringResult) -> None:
    """Record metrics for one scored wellness check"""
    assessment_counter.labels(outcome="scored").inc()
    score_category_counter.labels(category=result.category).inc()

    if not result.mortgage_metrics.lti.is_available:
        ratio_unavailable_counter.labels(ratio="lti").inc()
    if not result.mortgage_metrics.dti.is_available:
        ratio_unavailable_counter.labels(ratio="dti").inc()

    runway_days_histogram.observe(result.runway.days)


def record_rejection() -> None:
    assessment_counter.labels(outcome="invalid").inc()
