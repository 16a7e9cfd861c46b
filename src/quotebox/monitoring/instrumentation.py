"""HTTP request instrumentation for the /metrics endpoint.

Wires QuoteMetrics into prometheus-fastapi-instrumentator: the instrumentator
provides the middleware and the /metrics route, QuoteMetrics provides the
``http_requests_total{method,route,status}`` counter.
"""

from http import HTTPStatus
from typing import Callable

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_fastapi_instrumentator.metrics import Info

from quotebox.monitoring.metrics import QuoteMetrics


def status_text(status: str) -> str:
    """
    Reason phrase for a numeric status code ("200" -> "OK").

    Unknown or non-numeric codes map to an empty string.
    """
    try:
        return HTTPStatus(int(status)).phrase
    except ValueError:
        return ""


def http_requests_total(metrics: QuoteMetrics) -> Callable[[Info], None]:
    """
    Instrumentation function counting every request.

    ``route`` is the templated route path, or the raw URL path when no
    route matched; ``status`` is the reason phrase of the response code.
    """

    def instrumentation(info: Info) -> None:
        metrics.record_http_request(
            method=info.method,
            route=info.modified_handler,
            status=status_text(info.modified_status),
        )

    return instrumentation


def instrument_app(app: FastAPI, metrics: QuoteMetrics, endpoint: str = "/metrics") -> Instrumentator:
    """
    Add request instrumentation and expose ``metrics.registry`` at ``endpoint``.

    Must run before the application starts (it registers middleware).
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_group_untemplated=False,
        registry=metrics.registry,
    )
    instrumentator.add(http_requests_total(metrics))
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=endpoint, include_in_schema=False)
    return instrumentator
