"""Prometheus metrics for the resource provider."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "resource_provider_reconcile_total",
    "Total number of reconciliation calls",
    ["kind", "operation", "result"],
)

reconcile_duration_seconds = Histogram(
    "resource_provider_reconcile_duration_seconds",
    "Duration of reconciliation calls in seconds",
    ["kind", "operation"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Configuration drift detection metrics
drift_detected_total = Counter(
    "resource_provider_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind", "drift_type"],
)

# Remote API call metrics
api_call_total = Counter(
    "resource_provider_api_call_total",
    "Total number of remote API calls",
    ["service", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "resource_provider_api_call_duration_seconds",
    "Duration of remote API calls in seconds",
    ["service", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

# Error metrics
error_total = Counter(
    "resource_provider_error_total",
    "Total number of errors",
    ["kind", "error_type"],
)
