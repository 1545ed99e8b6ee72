"""Prometheus metrics for the AI relay.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# AI request metrics
# ---------------------------------------------------------------------------

AI_REQUESTS = Counter(
    "relay_ai_requests_total",
    "Total AI relay requests",
    ["type", "status"],  # status: success or an error code
)

GATEWAY_DURATION = Histogram(
    "relay_gateway_duration_seconds",
    "Duration of chat-completion gateway calls in seconds",
    ["type"],
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "relay_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "relay_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0, 30.0, 60.0),
)
