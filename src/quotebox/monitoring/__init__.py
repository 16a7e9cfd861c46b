"""Monitoring and metrics instrumentation for QuoteBox.

Exports the Prometheus metrics recorder used by the client, handlers and
HTTP instrumentation.
"""

from quotebox.monitoring.metrics import QuoteMetrics

__all__ = [
    "QuoteMetrics",
]
