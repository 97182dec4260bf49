"""Prometheus metrics for upstream API calls and booking submissions."""

from prometheus_client import Counter, Histogram

upstream_latency_ms = Histogram(
    "upstream_latency_ms",
    "Remote API call latency in milliseconds",
    ["endpoint", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

upstream_errors_total = Counter(
    "upstream_errors_total",
    "Total remote API call errors",
    ["endpoint", "reason"],
)

booking_submissions_total = Counter(
    "booking_submissions_total",
    "Booking submissions by outcome and payment method",
    ["outcome", "payment_method"],
)


class PrometheusApiMetrics:
    """Prometheus-based upstream call metrics."""

    def record_latency(self, endpoint: str, outcome: str, latency_ms: float) -> None:
        """Record upstream call latency."""
        upstream_latency_ms.labels(endpoint=endpoint, outcome=outcome).observe(latency_ms)

    def inc_error(self, endpoint: str, reason: str) -> None:
        """Increment error counter."""
        upstream_errors_total.labels(endpoint=endpoint, reason=reason).inc()

    def inc_booking(self, outcome: str, payment_method: str) -> None:
        """Increment booking submission counter."""
        booking_submissions_total.labels(outcome=outcome, payment_method=payment_method).inc()
