"""
Abstract base client for quote generation.

Defines the interface the HTTP handlers depend on. This abstraction allows
swapping the upstream provider (or injecting a fake in tests) without
changing the API layer.
"""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger(__name__)


class BaseQuoteClient(ABC):
    """
    Abstract base class for quote generation clients.

    Responsibilities:
    - Turn a validated tag into quote text
    - Apply the retry policy to transient upstream failures
    - Report upstream health

    Does NOT handle:
    - Tag validation (the API layer normalizes tags first)
    - Persistence (that's QuoteRepository's job)
    """

    def __init__(self, base_url: str, timeout: float = 30.0):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the chat-completion API
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        logger.info(
            "Initialized quote client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate_quote(self, tag: str) -> str:
        """
        Generate an inspirational quote about ``tag``.

        Args:
            tag: Normalized tag (trimmed, 1-50 characters)

        Returns:
            Quote text, at least 10 characters long

        Raises:
            QuoteClientError: Any upstream failure, after the retry policy
                gave up
        """

    async def close(self) -> None:
        """
        Close client connections and cleanup resources.

        Should be called on shutdown. Default implementation does nothing.
        """
        logger.debug("Closing quote client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
