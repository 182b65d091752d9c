"""Custom Prometheus metrics for the GCM sender.

These metrics are registered in the default prometheus_client registry and
are exposed by whatever process embeds the sender. Alert rules should be
configured for:
- gcm_requests_total{outcome="terminal"} (rejected requests, bad API key)
- gcm_retries_total (sustained retries indicate connection server trouble)
- gcm_recipient_results_total{outcome="failed"} (stale registration ids)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

gcm_requests_total = Counter(
    "gcm_requests_total",
    "Total send operations by operation and final outcome",
    ["operation", "outcome"],
)
"""
Send operations counter.

Labels:
- operation: single, multicast
- outcome: ok (result returned), terminal (error raised), partial (multicast
  returned after a swallowed transport error), deadline (deadline expired)
"""

gcm_request_latency_seconds = Histogram(
    "gcm_request_latency_seconds",
    "Latency of one HTTP round-trip to the connection server",
    ["operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# === Retry Metrics ===

gcm_retries_total = Counter(
    "gcm_retries_total",
    "Total retry rounds by operation and reason",
    ["operation", "reason"],
)
"""
Retry rounds counter.

Labels:
- operation: single, multicast
- reason: http_5xx (whole call failed), application (Unavailable /
  InternalServerError reported in a 200 response)
"""

# === Recipient Metrics ===

gcm_recipient_results_total = Counter(
    "gcm_recipient_results_total",
    "Final per-recipient outcomes of multicast sends",
    ["outcome"],
)
"""
Per-recipient outcomes after reconciliation.

Labels:
- outcome: delivered, canonical (delivered with a replacement id), failed
"""
