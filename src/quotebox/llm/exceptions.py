"""
Custom exceptions for the quote generation client.

These exceptions let the retry policy and the HTTP handlers distinguish
between failure modes. Only UpstreamHTTPError carries a status code, and only
that status code decides whether an attempt is retried.
"""


class QuoteClientError(Exception):
    """
    Base exception for all quote client errors.

    All client-specific exceptions inherit from this to allow catching
    any generation failure with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(QuoteClientError):
    """Raised when the client is constructed without a usable API key."""
    pass


class UpstreamConnectionError(QuoteClientError):
    """
    Raised when the chat-completion endpoint cannot be reached.

    Includes connect errors, timeouts, DNS failures, protocol errors.
    Not retryable.
    """
    pass


class UpstreamHTTPError(QuoteClientError):
    """
    Raised when the endpoint answers with a non-2xx status.

    Carries the numeric status code and the raw response body. Retryable
    when the status is 429 or 5xx.
    """
    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"HTTP {status_code}: {body}",
            details={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class UpstreamResponseError(QuoteClientError):
    """Raised when a 2xx body cannot be decoded as a chat completion."""
    pass


class UpstreamAPIError(QuoteClientError):
    """Raised when a 2xx body carries an embedded application-level error."""
    pass


class EmptyChoicesError(QuoteClientError):
    """Raised when the completion has no choices."""
    pass


class InvalidQuoteError(QuoteClientError):
    """
    Raised when the generated text is empty or shorter than the minimum length.

    Terminal for the whole call: the retry policy does not retry it.
    """
    pass
