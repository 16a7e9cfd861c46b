"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from quotebox.api.dependencies import get_metrics, get_quote_client, get_repository
from quotebox.llm.base_client import BaseQuoteClient
from quotebox.main import create_app
from quotebox.persistence.orm import QuoteRecord
from quotebox.persistence.repository import QuoteRepository


@pytest.fixture
def mock_quote_client(sample_quote):
    """Mock quote client returning a fixed quote."""
    mock = AsyncMock(spec=BaseQuoteClient)
    mock.generate_quote = AsyncMock(return_value=sample_quote)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_repository():
    """Mock QuoteRepository that assigns id/created_at like the real one."""

    async def _add(record: QuoteRecord) -> QuoteRecord:
        record.id = uuid.uuid4()
        record.created_at = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        return record

    mock = AsyncMock(spec=QuoteRepository)
    mock.add = AsyncMock(side_effect=_add)
    mock.list_quotes = AsyncMock(return_value=[])
    mock.ping = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def api_client(test_settings, metrics, mock_quote_client, mock_repository):
    """
    TestClient with mocked dependencies.

    Used without a ``with`` block, so the lifespan (database connection) never
    runs; every dependency the routes need is overridden instead.
    """
    app = create_app(test_settings, quote_client=mock_quote_client, metrics=metrics)
    app.dependency_overrides[get_quote_client] = lambda: mock_quote_client
    app.dependency_overrides[get_repository] = lambda: mock_repository
    app.dependency_overrides[get_metrics] = lambda: metrics
    return TestClient(app)
