"""
FastAPI dependency injection for QuoteBox.

The application builds one AppContext at startup (client, repository,
metrics, database) and stores it on ``app.state``. Route handlers receive the
individual pieces through the functions below, which tests can replace with
``app.dependency_overrides``.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from quotebox.config import Settings
from quotebox.llm.base_client import BaseQuoteClient
from quotebox.monitoring.metrics import QuoteMetrics
from quotebox.persistence.database import Database
from quotebox.persistence.repository import QuoteRepository


@dataclass
class AppContext:
    """
    Dependency bundle shared by all requests.

    Attributes:
        settings: Application settings
        metrics: Metrics recorder
        quote_client: Upstream quote generator
        repository: Quote store
        database: Engine owner, None when the repository was supplied directly
    """

    settings: Settings
    metrics: QuoteMetrics
    quote_client: BaseQuoteClient
    repository: QuoteRepository
    database: Optional[Database] = None

    async def close(self) -> None:
        """Close the upstream client, then release the database pool."""
        try:
            await self.quote_client.close()
        finally:
            if self.database is not None:
                await self.database.dispose()


def get_context(request: Request) -> AppContext:
    """
    Get the application context built during startup.

    Returns:
        AppContext instance
    """
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_metrics(context: AppContext = Depends(get_context)) -> QuoteMetrics:
    return context.metrics


def get_quote_client(context: AppContext = Depends(get_context)) -> BaseQuoteClient:
    return context.quote_client


def get_repository(context: AppContext = Depends(get_context)) -> QuoteRepository:
    return context.repository
