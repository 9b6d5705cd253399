from __future__ import annotations

from prometheus_client import Counter, Histogram

# Upstream Q&A service metrics
qa_requests_total = Counter(
    "claire_qa_requests_total",
    "Total requests sent to the Q&A service",
    ["outcome"],
)

qa_request_duration = Histogram(
    "claire_qa_request_duration_seconds",
    "Round-trip duration of Q&A service requests",
    buckets=(0.5, 1, 2, 5, 10, 30, 60, 120),
)

# Normalizer metrics
payload_shapes_total = Counter(
    "claire_payload_shapes_total",
    "Detected Q&A payload shapes",
    ["shape"],
)

answers_rendered_total = Counter(
    "claire_answers_rendered_total",
    "Answer entries produced by the normalizer",
)

# Form metrics
query_validation_failures_total = Counter(
    "claire_query_validation_failures_total",
    "Submissions rejected before any request was sent",
    ["page"],
)
