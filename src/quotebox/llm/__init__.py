"""
Quote generation client abstraction.

Components:
- BaseQuoteClient: Abstract base class for quote clients
- PromptBuilder: Constructs chat-completion requests from a tag
- exceptions: Client-specific exceptions

The concrete OpenRouterClient lives in quotebox.llm.openrouter_client; it is
not re-exported here because it depends on quotebox.retry, which in turn
depends on these exceptions.
"""

from quotebox.llm.base_client import BaseQuoteClient
from quotebox.llm.prompt_builder import PromptBuilder
from quotebox.llm.exceptions import (
    ConfigurationError,
    EmptyChoicesError,
    InvalidQuoteError,
    QuoteClientError,
    UpstreamAPIError,
    UpstreamConnectionError,
    UpstreamHTTPError,
    UpstreamResponseError,
)

__all__ = [
    "BaseQuoteClient",
    "PromptBuilder",
    "ConfigurationError",
    "EmptyChoicesError",
    "InvalidQuoteError",
    "QuoteClientError",
    "UpstreamAPIError",
    "UpstreamConnectionError",
    "UpstreamHTTPError",
    "UpstreamResponseError",
]
