"""
Bounded retry policy for upstream quote generation.

Policy:
    - At most ``max_attempts`` attempts (2 by default)
    - Fixed ``delay_seconds`` pause before every attempt after the first
    - Only failures accepted by ``is_retryable`` lead to another attempt;
      anything else stops the loop immediately
    - When the loop stops, the last error is re-raised unchanged

Usage:
    policy = RetryPolicy()
    quote = await policy.run(lambda: client.make_request(request))
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

import structlog

from quotebox.llm.exceptions import UpstreamHTTPError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({429})
RETRYABLE_STATUS_RANGE = range(500, 600)


def is_retryable(exc: BaseException) -> bool:
    """
    Decide whether a failed attempt may be retried.

    Only HTTP-status failures qualify: 429 (rate limited) or any 5xx.
    Transport errors, decode errors, embedded API errors, empty choices and
    too-short quotes are terminal.
    """
    if isinstance(exc, UpstreamHTTPError):
        return (
            exc.status_code in RETRYABLE_STATUS_CODES
            or exc.status_code in RETRYABLE_STATUS_RANGE
        )
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """
    Sequential retry loop with a fixed delay.

    Attributes:
        max_attempts: Total attempts, including the first one
        delay_seconds: Pause before each retry
        retryable: Predicate deciding whether a failure may be retried
        sleep: Awaitable sleep function (injected in tests)
    """

    max_attempts: int = 2
    delay_seconds: float = 0.5
    retryable: Callable[[BaseException], bool] = is_retryable
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Execute ``operation`` under this policy.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt

        Returns:
            Result of the first successful attempt

        Raises:
            Exception: The last error when attempts are exhausted or the
                failure is not retryable
        """
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                logger.info(
                    "Retrying upstream call",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    delay_seconds=self.delay_seconds,
                )
                await self.sleep(self.delay_seconds)

            try:
                return await operation()
            except Exception as exc:
                retryable = self.retryable(exc)
                logger.warning(
                    "Upstream attempt failed",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    retryable=retryable,
                )
                if not retryable or attempt == self.max_attempts:
                    raise

        # range() above is never empty (max_attempts >= 1)
        raise AssertionError("unreachable")
