"""
FastAPI application entry point for QuoteBox.

Run with the ``quotebox`` console script, or
``uvicorn quotebox.main:create_app --factory``.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from quotebox.api.dependencies import AppContext
from quotebox.api.error_handlers import EXCEPTION_HANDLERS
from quotebox.api.frontend import mount_frontend
from quotebox.api.middleware import RequestTracingMiddleware
from quotebox.api.routes_quotes import router as quotes_router
from quotebox.api.routes_system import router as system_router
from quotebox.config import Settings, get_settings
from quotebox.llm.base_client import BaseQuoteClient
from quotebox.llm.openrouter_client import OpenRouterClient
from quotebox.logging_config import configure_logging
from quotebox.monitoring.instrumentation import instrument_app
from quotebox.monitoring.metrics import QuoteMetrics
from quotebox.persistence.database import Database
from quotebox.persistence.repository import QuoteRepository

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    quote_client: Optional[BaseQuoteClient] = None,
    metrics: Optional[QuoteMetrics] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (default: loaded from the environment)
        quote_client: Quote generator override (default: OpenRouterClient)
        metrics: Metrics recorder (default: bound to the global registry)

    Returns:
        Configured FastAPI app; the database is connected in its lifespan
    """
    settings = settings or get_settings()
    metrics = metrics or QuoteMetrics()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Application startup",
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            openrouter_base_url=settings.OPENROUTER_BASE_URL,
            model=settings.OPENROUTER_MODEL,
        )

        # Fatal on failure: the app must not serve without its database
        database = Database(settings)
        await database.connect()

        app.state.context = AppContext(
            settings=settings,
            metrics=metrics,
            quote_client=quote_client or OpenRouterClient.from_settings(settings, metrics),
            repository=QuoteRepository(database.sessionmaker),
            database=database,
        )
        logger.info("Application startup complete")

        try:
            yield
        finally:
            logger.info("Application shutdown")
            await app.state.context.close()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Inspirational quotes generated on demand for a mood or emotion",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    # Request tracing middleware (request_id in all logs)
    app.add_middleware(RequestTracingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(system_router, tags=["system"])
    app.include_router(quotes_router, tags=["quotes"])

    instrument_app(app, metrics)

    # Frontend last: "/" and /static must not shadow API routes
    mount_frontend(app, settings.FRONTEND_DIR)

    return app


def run() -> None:
    """Console entry point: load configuration and serve with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.critical(
            "Invalid configuration, refusing to start",
            errors=[f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()],
        )
        raise SystemExit(1)

    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # Keep the structlog handler installed above
    )


if __name__ == "__main__":
    run()
