"""
FastAPI exception handlers for structured error responses.

Every error leaves the service as ``{"error": <kind>, "message": <text>}``.
Route handlers raise APIError with the kind and status they want; framework
validation errors and unexpected exceptions are mapped here.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quotebox.api.middleware import REQUEST_ID_HEADER
from quotebox.api.models import ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Error raised by route handlers, rendered as a JSON error body.

    Attributes:
        status_code: HTTP status to answer with
        error: Machine-readable error kind
        message: Human-readable message
    """

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    Handle errors raised deliberately by route handlers.

    Args:
        request: FastAPI request
        exc: APIError instance

    Returns:
        JSON error response with the requested status
    """
    return error_response(exc.status_code, exc.error, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies and parameters.

    Maps to 400 Bad Request (client error). Not logged as a service failure.
    """
    logger.warning(
        "Invalid request format",
        extra={"path": request.url.path, "errors": exc.errors()},
    )

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "invalid_request",
        f"Invalid JSON format: {_summarize_errors(exc)}",
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    Runs outside the tracing middleware, so the request id is copied onto
    the response here.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )

    response = error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _summarize_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "request validation failed"


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    APIError: api_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
