"""
Async SQLAlchemy engine with connection pooling for the persistence layer.

Connection URL resolution:
- DATABASE_URL when set (postgres:// and postgresql:// are switched to the
  asyncpg driver, libpq's ``sslmode`` becomes asyncpg's ``ssl``)
- otherwise assembled from DB_HOST/DB_PORT/DB_USER/DB_PASS/DB_NAME/DB_SSLMODE

Schema creation goes through a SchemaMigrator so deployments can swap the
default create_all step for a real migration tool.
"""

from typing import Optional, Protocol

import structlog
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quotebox.config import Settings
from quotebox.persistence.exceptions import DatabaseUnavailableError
from quotebox.persistence.orm import Base

logger = structlog.get_logger(__name__)

_POSTGRES_ALIASES = {"postgres", "postgresql", "postgresql+psycopg2", "postgresql+psycopg"}


def build_database_url(settings: Settings) -> URL:
    """
    Resolve the async database URL from settings.

    Args:
        settings: Application settings

    Returns:
        SQLAlchemy URL using an async driver
    """
    if settings.DATABASE_URL:
        url = make_url(settings.DATABASE_URL)
        if url.drivername in _POSTGRES_ALIASES:
            url = url.set(drivername="postgresql+asyncpg")
        if url.drivername == "postgresql+asyncpg" and "sslmode" in url.query:
            sslmode = url.query["sslmode"]
            url = url.difference_update_query(["sslmode"]).update_query_dict({"ssl": sslmode})
        return url

    return URL.create(
        drivername="postgresql+asyncpg",
        username=settings.DB_USER,
        password=settings.DB_PASS,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
        query={"ssl": settings.DB_SSLMODE},
    )


class SchemaMigrator(Protocol):
    """Brings the database schema up to date before the app serves traffic."""

    async def migrate(self, engine: AsyncEngine) -> None:
        ...


class MetadataMigrator:
    """Creates missing tables and indexes from the ORM metadata."""

    async def migrate(self, engine: AsyncEngine) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema migrated", tables=sorted(Base.metadata.tables))


class Database:
    """
    Owns the async engine and session factory.

    Pool (server databases only): pool_size idle connections, up to
    pool_size + max_overflow open, recycled after pool_recycle seconds.
    """

    def __init__(self, settings: Settings, migrator: Optional[SchemaMigrator] = None):
        self.settings = settings
        self.url = build_database_url(settings)
        self.migrator = migrator or MetadataMigrator()
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseUnavailableError("database connection is not initialized")
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            raise DatabaseUnavailableError("database connection is not initialized")
        return self._sessionmaker

    def _engine_options(self) -> dict:
        options: dict = {"echo": self.settings.DB_ECHO}
        if self.url.get_backend_name() != "sqlite":
            options.update(
                pool_size=self.settings.DB_POOL_SIZE,
                max_overflow=self.settings.DB_MAX_OVERFLOW,
                pool_recycle=self.settings.DB_POOL_RECYCLE,
                pool_pre_ping=True,
            )
        return options

    async def connect(self) -> None:
        """
        Create the engine, run the schema migrator and verify connectivity.

        Raises:
            DatabaseUnavailableError: Connection or migration failed
        """
        self._engine = create_async_engine(self.url, **self._engine_options())
        self._sessionmaker = async_sessionmaker(self._engine, expire_on_commit=False)

        try:
            await self.migrator.migrate(self._engine)
            await self.ping()
        except (SQLAlchemyError, OSError) as e:
            await self.dispose()
            raise DatabaseUnavailableError(
                f"failed to connect to database: {e}",
                details={"backend": self.url.get_backend_name()},
            ) from e

        logger.info(
            "Database connection established successfully",
            backend=self.url.get_backend_name(),
            host=self.url.host,
            database=self.url.database,
        )

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises on failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Release pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connection pool disposed")
        self._engine = None
        self._sessionmaker = None
