"""Monitoring and metrics instrumentation for the GCM sender.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from gcm_sender.monitoring.metrics import (
    gcm_recipient_results_total,
    gcm_request_latency_seconds,
    gcm_requests_total,
    gcm_retries_total,
)

__all__ = [
    "gcm_requests_total",
    "gcm_request_latency_seconds",
    "gcm_retries_total",
    "gcm_recipient_results_total",
]
