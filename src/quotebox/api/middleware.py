"""Request tracing middleware.

Every request gets a request_id bound into the structlog context, so all log
lines emitted while serving it can be correlated. The id is echoed back in
the X-Request-ID header; a well-formed id sent by the caller (e.g. a proxy)
is reused instead of generating a new one.
"""

import re
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

# Scraped/probed constantly; completion is logged at debug level only
QUIET_PATHS = frozenset({"/healthz", "/metrics"})


def resolve_request_id(request: Request) -> str:
    """Reuse the caller's request id when it is safe to log, else make one."""
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind request_id/method/path/client to the log context for each request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        path = request.url.path

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
            client_host=request.client.host if request.client else None,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("Request failed", exc_info=exc, duration_ms=_elapsed_ms(start_time))
            raise
        else:
            log = logger.debug if path in QUIET_PATHS else logger.info
            log(
                "Request completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start_time),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
