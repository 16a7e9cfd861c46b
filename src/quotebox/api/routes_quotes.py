"""
Quote API routes.

- POST /api/v1/quote: generate, persist and return a quote for a tag
- GET /api/v1/quotes: list recent quotes, optionally filtered by tag
- GET /api/v1/tags: preset tag catalog
"""

import re
import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request, status

from quotebox.api.dependencies import get_metrics, get_quote_client, get_repository
from quotebox.api.error_handlers import APIError
from quotebox.api.models import (
    CreateQuoteRequest,
    ErrorResponse,
    QuoteListResponse,
    QuoteResponse,
    TagsResponse,
)
from quotebox.llm.base_client import BaseQuoteClient
from quotebox.llm.exceptions import QuoteClientError
from quotebox.models.enums import QuoteSource
from quotebox.models.tags import PRESET_TAGS, InvalidTagError, get_tag_source, normalize_tag
from quotebox.monitoring.metrics import QuoteMetrics
from quotebox.persistence.exceptions import RepositoryError
from quotebox.persistence.orm import QuoteRecord
from quotebox.persistence.repository import QuoteRepository

logger = structlog.get_logger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

router = APIRouter(prefix="/api/v1")


def parse_limit(raw: Optional[str]) -> int:
    """
    Parse the ``limit`` query parameter.

    Only plain ASCII decimal integers with an optional sign are accepted.
    Missing, unparseable or sub-1 values fall back to DEFAULT_LIMIT; values
    above MAX_LIMIT are clamped down.
    """
    if raw is None or not _INTEGER_PATTERN.fullmatch(raw):
        return DEFAULT_LIMIT
    limit = int(raw)
    if limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


@router.post(
    "/quote",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Generate a quote for a tag",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or tag"},
        500: {"model": ErrorResponse, "description": "Quote could not be saved"},
        503: {"model": ErrorResponse, "description": "Quote generation failed"},
    },
)
async def create_quote(
    body: CreateQuoteRequest,
    request: Request,
    quote_client: BaseQuoteClient = Depends(get_quote_client),
    repository: QuoteRepository = Depends(get_repository),
    metrics: QuoteMetrics = Depends(get_metrics),
) -> QuoteResponse:
    """
    Generate a quote from the upstream model and store it.

    Generation failures of any kind answer 503 without persisting anything;
    the detailed cause is only logged.
    """
    try:
        tag = normalize_tag(body.tag)
    except InvalidTagError as e:
        raise APIError(status.HTTP_400_BAD_REQUEST, "invalid_tag", e.message)

    start_time = time.perf_counter()

    try:
        quote_text = await quote_client.generate_quote(tag)
    except QuoteClientError as e:
        metrics.record_quote_error()
        logger.error(
            "Error generating quote",
            tag=tag,
            error_type=type(e).__name__,
            error=e.message,
            details=e.details,
        )
        raise APIError(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "quote_generation_failed",
            "Failed to generate quote. Please try again later.",
        )

    latency_seconds = time.perf_counter() - start_time
    latency_ms = int(latency_seconds * 1000)

    metrics.record_quote_fetched(tag)
    metrics.record_latency(latency_seconds)

    record = QuoteRecord(
        tag=tag,
        tag_source=get_tag_source(tag).value,
        quote_text=quote_text,
        author=None,  # The generation path never yields an author
        source=QuoteSource.OPENROUTER.value,
        latency_ms=latency_ms,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent", ""),
    )

    try:
        record = await repository.add(record)
    except RepositoryError as e:
        logger.error("Error saving quote to database", tag=tag, error=e.message)
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "database_error",
            "Failed to save quote",
        )

    logger.info(
        "Quote created successfully",
        quote_id=str(record.id),
        tag=record.tag,
        tag_source=record.tag_source,
        latency_ms=record.latency_ms,
        requestor=body.requestor,
    )

    return QuoteResponse.from_record(record)


@router.get(
    "/quotes",
    response_model=QuoteListResponse,
    response_model_exclude_none=True,
    summary="List recent quotes",
    responses={
        500: {"model": ErrorResponse, "description": "Quotes could not be fetched"},
    },
)
async def get_quotes(
    tag: Optional[str] = None,
    limit: Optional[str] = None,
    repository: QuoteRepository = Depends(get_repository),
) -> QuoteListResponse:
    """
    Return quotes newest first.

    ``limit`` defaults to 20 and is clamped to [1, 100]; invalid values fall
    back to the default instead of being rejected.
    """
    try:
        records = await repository.list_quotes(tag=tag or None, limit=parse_limit(limit))
    except RepositoryError as e:
        logger.error("Error fetching quotes", tag=tag, error=e.message)
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "database_error",
            "Failed to fetch quotes",
        )

    quotes = [QuoteResponse.from_record(record) for record in records]
    return QuoteListResponse(quotes=quotes, count=len(quotes))


@router.get(
    "/tags",
    response_model=TagsResponse,
    summary="Preset tag catalog",
)
async def get_tags() -> TagsResponse:
    return TagsResponse(tags=list(PRESET_TAGS))
