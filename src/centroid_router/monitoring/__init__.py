"""Monitoring and metrics instrumentation for Centroid Router.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from centroid_router.monitoring.metrics import (
    best_score_histogram,
    centroid_builds_total,
    centroid_labels,
    classifications_total,
    embedding_latency_seconds,
    embedding_tokens_total,
    routed_label_total,
)

__all__ = [
    "classifications_total",
    "routed_label_total",
    "best_score_histogram",
    "embedding_latency_seconds",
    "embedding_tokens_total",
    "centroid_builds_total",
    "centroid_labels",
]
