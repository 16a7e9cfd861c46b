"""
API-specific request and response models for FastAPI endpoints.

These models shape the public JSON contract. The persisted QuoteRecord
carries more fields (latency, client address, user agent) than are exposed.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from quotebox.persistence.orm import QuoteRecord


class CreateQuoteRequest(BaseModel):
    """Request body for POST /api/v1/quote."""

    tag: str = Field(
        description="Emotion/mood tag, trimmed server-side (1-50 characters)",
        examples=["gratitude", "first day at a new job"],
    )
    requestor: Optional[str] = Field(
        default=None,
        description="Optional free-form requester label (not persisted)",
    )


class QuoteResponse(BaseModel):
    """Public view of a stored quote."""

    id: uuid.UUID = Field(description="Quote identifier (UUID)")
    tag: str = Field(description="Requested tag")
    quote: str = Field(description="Generated quote text")
    author: Optional[str] = Field(
        default=None,
        description="Quote author (omitted when unknown)",
    )
    source: str = Field(description="Upstream generator", examples=["openrouter"])
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    @classmethod
    def from_record(cls, record: QuoteRecord) -> "QuoteResponse":
        return cls(
            id=record.id,
            tag=record.tag,
            quote=record.quote_text,
            author=record.author,
            source=record.source,
            created_at=record.created_at,
        )


class QuoteListResponse(BaseModel):
    """Response for GET /api/v1/quotes."""

    quotes: list[QuoteResponse] = Field(default_factory=list)
    count: int = Field(ge=0, description="Number of quotes returned")


class TagsResponse(BaseModel):
    """Response for GET /api/v1/tags."""

    tags: list[str] = Field(description="Preset tag catalog, in display order")


class HealthResponse(BaseModel):
    """Response for GET /healthz."""

    status: str = Field(examples=["ok", "unhealthy"])
    error: Optional[str] = Field(default=None, examples=["database connection failed"])


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Machine-readable error kind",
        examples=["invalid_request", "invalid_tag", "quote_generation_failed", "database_error"],
    )
    message: str = Field(description="Human-readable error message")
