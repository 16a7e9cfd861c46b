"""
Domain models for QuoteBox.

- enums: TagSource, QuoteSource, ChatRole
- tags: Tag catalog, classification and normalization
- llm_models: Chat-completion request/response wire models
"""

from quotebox.models.enums import ChatRole, QuoteSource, TagSource
from quotebox.models.llm_models import (
    APIErrorPayload,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    ResponseMessage,
)
from quotebox.models.tags import (
    MAX_TAG_LENGTH,
    PRESET_TAGS,
    InvalidTagError,
    get_tag_source,
    is_preset_tag,
    normalize_tag,
)

__all__ = [
    "ChatRole",
    "QuoteSource",
    "TagSource",
    "APIErrorPayload",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "Choice",
    "ResponseMessage",
    "MAX_TAG_LENGTH",
    "PRESET_TAGS",
    "InvalidTagError",
    "get_tag_source",
    "is_preset_tag",
    "normalize_tag",
]
