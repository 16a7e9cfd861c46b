"""
Unit tests for QuoteMetrics.
"""

from prometheus_client import CollectorRegistry, generate_latest

from quotebox.monitoring.metrics import QuoteMetrics


def test_upstream_gauge_starts_down(metrics):
    assert metrics.registry.get_sample_value("openrouter_up") == 0.0


def test_set_upstream_status(metrics):
    metrics.set_upstream_status(True)
    assert metrics.registry.get_sample_value("openrouter_up") == 1.0

    metrics.set_upstream_status(False)
    assert metrics.registry.get_sample_value("openrouter_up") == 0.0


def test_record_quote_fetched(metrics):
    metrics.record_quote_fetched("joy")
    metrics.record_quote_fetched("joy")
    metrics.record_quote_fetched("bittersweet")

    registry = metrics.registry
    assert registry.get_sample_value("quotes_fetched_total") == 3.0
    assert registry.get_sample_value("quotes_by_tag_total", {"tag": "joy"}) == 2.0
    assert registry.get_sample_value("quotes_by_tag_total", {"tag": "bittersweet"}) == 1.0


def test_record_quote_error(metrics):
    metrics.record_quote_error()

    assert metrics.registry.get_sample_value("quote_fetch_errors_total") == 1.0


def test_record_latency(metrics):
    metrics.record_latency(0.25)
    metrics.record_latency(1.5)

    registry = metrics.registry
    assert registry.get_sample_value("quote_fetch_latency_seconds_count") == 2.0
    assert registry.get_sample_value("quote_fetch_latency_seconds_sum") == 1.75


def test_record_http_request(metrics):
    metrics.record_http_request("GET", "/api/v1/quotes", "OK")

    assert metrics.registry.get_sample_value(
        "http_requests_total", {"method": "GET", "route": "/api/v1/quotes", "status": "OK"}
    ) == 1.0


def test_exposition_names():
    metrics = QuoteMetrics(registry=CollectorRegistry())
    output = generate_latest(metrics.registry).decode()

    for name in (
        "quotes_fetched_total",
        "quote_fetch_errors_total",
        "quote_fetch_latency_seconds",
        "openrouter_up",
    ):
        assert name in output


def test_separate_registries_are_independent():
    first = QuoteMetrics(registry=CollectorRegistry())
    second = QuoteMetrics(registry=CollectorRegistry())

    first.record_quote_error()

    assert first.registry.get_sample_value("quote_fetch_errors_total") == 1.0
    assert second.registry.get_sample_value("quote_fetch_errors_total") == 0.0
