"""
Retry policy for upstream quote generation.

A fixed two-attempt loop with a 500 ms pause, retrying only on HTTP 429 and
5xx responses. The policy is independent of the HTTP client and works with
any coroutine factory.

Usage:
    >>> from quotebox.retry import RetryPolicy
    >>> policy = RetryPolicy()
    >>> quote = await policy.run(lambda: client.make_request(request))
"""

from quotebox.retry.policy import RetryPolicy, is_retryable

__all__ = [
    "RetryPolicy",
    "is_retryable",
]
