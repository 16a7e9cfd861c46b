"""
Chat-completion wire models for the OpenRouter API.

These models are internal to the LLM layer and mirror the documented
OpenAI-compatible request/response JSON shape. They are separate from the
API models (QuoteResponse) and the ORM record (QuoteRecord).
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from quotebox.models.enums import ChatRole


class ChatMessage(BaseModel):
    """A single chat message."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: ChatRole = Field(..., description="Message author role")
    content: Optional[str] = Field(default=None, description="Message text")


class ChatCompletionRequest(BaseModel):
    """
    Request body for POST /chat/completions.

    Serialized as-is with model_dump(); field names match the API.
    """
    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier (e.g., 'openrouter/auto')")
    messages: list[ChatMessage] = Field(..., min_length=1)
    temperature: float = Field(default=0.8, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=150, ge=1, description="Maximum tokens to generate")


class ResponseMessage(BaseModel):
    """Assistant message inside a completion choice."""

    role: Optional[str] = None
    content: Optional[str] = None


class Choice(BaseModel):
    """A completion choice."""

    message: ResponseMessage
    finish_reason: Optional[str] = None


class APIErrorPayload(BaseModel):
    """Application-level error embedded in a 2xx response body."""

    message: str = ""
    type: Optional[str] = None
    code: Optional[Union[int, str]] = None


class ChatCompletionResponse(BaseModel):
    """
    Response body from POST /chat/completions.

    Unknown fields (usage, provider, created...) are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: list[Choice] = Field(default_factory=list)
    error: Optional[APIErrorPayload] = None
