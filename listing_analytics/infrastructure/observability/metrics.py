"""Prometheus metrics for engine usage, outcomes and request latency"""

from prometheus_client import Counter, Histogram

# Computation metrics
computation_counter = Counter(
    "listing_analytics_computation_total",
    "Total engine computations",
    ["operation", "outcome"],  # outcome: ok | invalid_input | insufficient_data | error
)

negotiation_suggestion_counter = Counter(
    "listing_analytics_negotiation_suggestion_total",
    "Negotiation suggestions by type",
    ["type"],
)

market_trend_counter = Counter(
    "listing_analytics_market_trend_total",
    "Market trend classifications",
    ["trend"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_computation(operation: str, outcome: str = "ok") -> None:
    """Record one engine call and its outcome"""
    computation_counter.labels(operation=operation, outcome=outcome).inc()


def record_suggestion(suggestion_type: str) -> None:
    """Record the negotiation posture that was recommended"""
    negotiation_suggestion_counter.labels(type=suggestion_type).inc()


def record_trend(trend: str) -> None:
    """Record a market trend classification"""
    market_trend_counter.labels(trend=trend).inc()
