"""
Unit tests for the HTTP request instrumentation.
"""

from unittest.mock import MagicMock

import pytest

from quotebox.monitoring.instrumentation import http_requests_total, status_text


@pytest.mark.parametrize(
    "status, expected",
    [
        ("200", "OK"),
        ("400", "Bad Request"),
        ("404", "Not Found"),
        ("500", "Internal Server Error"),
        ("503", "Service Unavailable"),
        ("299", ""),
        ("2xx", ""),
    ],
)
def test_status_text(status, expected):
    assert status_text(status) == expected


def test_http_requests_total_labels(metrics):
    info = MagicMock(method="POST", modified_handler="/api/v1/quote", modified_status="503")

    http_requests_total(metrics)(info)

    assert metrics.registry.get_sample_value(
        "http_requests_total",
        {"method": "POST", "route": "/api/v1/quote", "status": "Service Unavailable"},
    ) == 1.0
