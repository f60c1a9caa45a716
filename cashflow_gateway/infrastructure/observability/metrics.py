"""Prometheus metrics for dashboard traffic, period scope and ledger reads"""

from prometheus_client import Counter, Histogram

# Dashboard metrics
dashboard_requests_counter = Counter(
    "cashflow_dashboard_requests_total",
    "Dashboard computations served",
    ["view"],  # full | month | ytd | range
)

period_months_histogram = Histogram(
    "cashflow_period_months",
    "Number of months in the resolved period",
    buckets=[0, 1, 3, 6, 9, 12],
)

# Ledger metrics
ledger_fetch_latency_histogram = Histogram(
    "ledger_fetch_latency_seconds",
    "Remote ledger response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ledger_fetch_failures_counter = Counter(
    "ledger_fetch_failures_total",
    "Failed ledger reads",
    ["source"],  # database | http
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_dashboard(view: str, month_count: int) -> None:
    """Record which views are used and how wide the selected periods are"""
    dashboard_requests_counter.labels(view=view).inc()
    period_months_histogram.observe(month_count)
