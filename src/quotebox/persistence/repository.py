"""
Repository pattern for relational persistence of generated quotes.

Provides insert and query operations for QuoteRecord using SQLAlchemy's
async session API.

Storage Strategy:
- Table "quotes", UUID primary key assigned at creation
- Index on tag (exact-match filter) and created_at (newest-first listing)
- Records are never updated or deleted by the service
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quotebox.persistence.exceptions import RepositoryError
from quotebox.persistence.orm import QuoteRecord, utcnow

logger = structlog.get_logger(__name__)

DEFAULT_LIST_LIMIT = 20


class QuoteRepository:
    """
    Repository for generated quotes.

    Every operation opens its own session from the shared pool.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        """
        Initialize repository.

        Args:
            sessionmaker: Async session factory bound to the engine
        """
        self.sessionmaker = sessionmaker

    async def add(self, record: QuoteRecord) -> QuoteRecord:
        """
        Persist a new quote.

        Assigns ``id`` and ``created_at`` when the caller left them empty.

        Args:
            record: QuoteRecord to insert

        Returns:
            The stored record

        Raises:
            RepositoryError: Insert failed
        """
        if record.id is None:
            record.id = uuid.uuid4()
        if record.created_at is None:
            record.created_at = utcnow()

        try:
            async with self.sessionmaker() as session:
                async with session.begin():
                    session.add(record)
        except SQLAlchemyError as e:
            logger.error("Failed to save quote", quote_id=str(record.id), error=str(e))
            raise RepositoryError(
                f"failed to save quote: {e}",
                details={"quote_id": str(record.id)},
            ) from e

        logger.info(
            "Saved quote",
            quote_id=str(record.id),
            tag=record.tag,
            latency_ms=record.latency_ms,
        )
        return record

    async def list_quotes(
        self, tag: Optional[str] = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[QuoteRecord]:
        """
        Fetch quotes newest first.

        Args:
            tag: Exact tag to filter on (None or "" means no filter)
            limit: Maximum number of rows

        Returns:
            List of QuoteRecord ordered by created_at descending

        Raises:
            RepositoryError: Query failed
        """
        stmt = select(QuoteRecord).order_by(QuoteRecord.created_at.desc()).limit(limit)
        if tag:
            stmt = stmt.where(QuoteRecord.tag == tag)

        try:
            async with self.sessionmaker() as session:
                result = await session.scalars(stmt)
                quotes = list(result.all())
        except SQLAlchemyError as e:
            logger.error("Failed to fetch quotes", tag=tag, limit=limit, error=str(e))
            raise RepositoryError(
                f"failed to fetch quotes: {e}",
                details={"tag": tag, "limit": limit},
            ) from e

        logger.debug("Fetched quotes", tag=tag, limit=limit, count=len(quotes))
        return quotes

    async def ping(self) -> None:
        """
        Connectivity probe for health reporting.

        Raises:
            RepositoryError: Database unreachable
        """
        try:
            async with self.sessionmaker() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database health check failed", error=str(e))
            raise RepositoryError(f"database ping failed: {e}") from e
