"""Prometheus metrics for QuoteBox.

These metrics are exposed at /metrics and should be scraped by Prometheus.
Alert rules should be configured for:
- quote_fetch_errors_total (upstream generation failures)
- openrouter_up (0 means the last upstream call failed)
- quote_fetch_latency_seconds (slow upstream model)

Metrics live on a QuoteMetrics instance bound to a CollectorRegistry, so the
application passes one recorder around explicitly and tests can use a
private registry.
"""

from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram


class QuoteMetrics:
    """
    Counters, histogram and gauge for quote generation and HTTP traffic.

    All prometheus_client metric types are safe for concurrent updates.

    Attributes:
        registry: Registry the metrics are registered with
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else REGISTRY

        # === Quote generation ===

        self.quotes_fetched_total = Counter(
            "quotes_fetched_total",
            "Total number of quotes successfully fetched from OpenRouter",
            registry=self.registry,
        )

        self.quotes_by_tag = Counter(
            "quotes_by_tag",
            "Number of quotes fetched by tag",
            ["tag"],
            registry=self.registry,
        )
        # Labels:
        # - tag: requested tag (preset or custom, already trimmed)

        self.quote_fetch_errors_total = Counter(
            "quote_fetch_errors_total",
            "Total number of errors while fetching quotes",
            registry=self.registry,
        )

        self.quote_fetch_latency_seconds = Histogram(
            "quote_fetch_latency_seconds",
            "Latency of quote fetch operations in seconds",
            registry=self.registry,
        )

        # === HTTP ===

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status"],
            registry=self.registry,
        )

        # === Upstream health ===

        self.openrouter_up = Gauge(
            "openrouter_up",
            "Indicates if the last OpenRouter API call succeeded (1) or failed (0)",
            registry=self.registry,
        )
        # Unknown until the first call
        self.openrouter_up.set(0)

    def record_quote_fetched(self, tag: str) -> None:
        self.quotes_fetched_total.inc()
        self.quotes_by_tag.labels(tag=tag).inc()

    def record_quote_error(self) -> None:
        self.quote_fetch_errors_total.inc()

    def record_latency(self, seconds: float) -> None:
        self.quote_fetch_latency_seconds.observe(seconds)

    def record_http_request(self, method: str, route: str, status: str) -> None:
        self.http_requests_total.labels(method=method, route=route, status=status).inc()

    def set_upstream_status(self, up: bool) -> None:
        self.openrouter_up.set(1 if up else 0)
