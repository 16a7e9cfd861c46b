"""SQLAlchemy ORM model for the quotes table."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class QuoteRecord(Base):
    """
    A generated quote.

    Created exactly once per successful generation request and never updated.
    """

    __tablename__ = "quotes"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Request
    tag: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    tag_source: Mapped[str] = mapped_column(String(20), nullable=False)  # "preset" or "custom"

    # Generation
    quote_text: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)
    source: Mapped[str] = mapped_column(String(50), nullable=False)  # "openrouter"
    latency_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Requesting client
    client_ip: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"QuoteRecord(id={self.id}, tag={self.tag!r}, source={self.source!r})"
