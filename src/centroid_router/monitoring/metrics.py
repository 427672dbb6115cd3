"""Custom Prometheus metrics for Centroid Router.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- classifications_total{outcome="unclassified"} (rising share means labels no longer cover traffic)
- embedding_latency_seconds (provider slowness)
- centroid_builds_total{status="failure"} (rebuilds failing)
"""

from prometheus_client import Counter, Gauge, Histogram

# === Classification Metrics ===

classifications_total = Counter(
    "classifications_total",
    "Total classifications by outcome",
    ["outcome"],
)
"""
Classifications counter.

Labels:
- outcome: routed (best score met the threshold), unclassified (it did not)
"""

routed_label_total = Counter(
    "routed_label_total",
    "Total classifications routed to each label",
    ["label"],
)
"""
Routing distribution by label (includes "unclassified").

Used to spot label imbalance between training data and live traffic.
"""

best_score_histogram = Histogram(
    "classification_best_score",
    "Best-match similarity score per classification",
    buckets=[0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0],
)
"""
Distribution of best-match scores.

Useful for tuning CLASSIFICATION_THRESHOLD.
"""

# === Embedding Provider Metrics ===

embedding_latency_seconds = Histogram(
    "embedding_latency_seconds",
    "Embedding request latency in seconds",
    ["backend", "success"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)
"""
Embedding request latency histogram.

Labels:
- backend: openai, ollama
- success: true (request succeeded), false (request failed)

Alert thresholds:
- WARN: p95 > 2s
- CRITICAL: p95 > 10s
"""

embedding_tokens_total = Counter(
    "embedding_tokens_total",
    "Total input tokens billed by the embedding provider",
    ["model"],
)
"""
Token consumption counter, for cost estimation.
"""

# === Build Metrics ===

centroid_builds_total = Counter(
    "centroid_builds_total",
    "Total centroid builds by status",
    ["status"],
)
"""
Centroid build counter.

Labels:
- status: success, failure
"""

centroid_labels = Gauge(
    "centroid_labels",
    "Number of labels in the most recently built centroid table",
)
