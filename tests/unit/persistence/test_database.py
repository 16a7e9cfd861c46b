"""
Unit tests for database URL resolution and the Database lifecycle.
"""

import pytest
from unittest.mock import AsyncMock

from quotebox.persistence.database import Database, MetadataMigrator, build_database_url
from quotebox.persistence.exceptions import DatabaseUnavailableError


def test_url_assembled_from_parts(test_settings):
    settings = test_settings.model_copy(update={"DATABASE_URL": None})

    url = build_database_url(settings)

    assert url.drivername == "postgresql+asyncpg"
    assert url.username == "quoteuser"
    assert url.password == "quotepw"
    assert url.host == "localhost"
    assert url.port == 5432
    assert url.database == "quotedb"
    assert dict(url.query) == {"ssl": "disable"}


def test_url_parts_overridden(test_settings):
    settings = test_settings.model_copy(
        update={
            "DATABASE_URL": None,
            "DB_HOST": "db.internal",
            "DB_PORT": 6543,
            "DB_SSLMODE": "require",
        }
    )

    url = build_database_url(settings)

    assert url.host == "db.internal"
    assert url.port == 6543
    assert dict(url.query) == {"ssl": "require"}


@pytest.mark.parametrize("scheme", ["postgres", "postgresql"])
def test_database_url_switched_to_asyncpg(test_settings, scheme):
    settings = test_settings.model_copy(
        update={"DATABASE_URL": f"{scheme}://u:p@pg:5433/quotes?sslmode=verify-full"}
    )

    url = build_database_url(settings)

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "pg"
    assert url.port == 5433
    assert url.database == "quotes"
    assert dict(url.query) == {"ssl": "verify-full"}


def test_sqlite_url_untouched(test_settings):
    url = build_database_url(test_settings)

    assert url.drivername == "sqlite+aiosqlite"
    assert url.database == ":memory:"


def test_sqlite_engine_has_no_pool_sizing(test_settings):
    options = Database(test_settings)._engine_options()

    assert "pool_size" not in options
    assert "max_overflow" not in options


def test_server_engine_pool_sizing(test_settings):
    settings = test_settings.model_copy(update={"DATABASE_URL": None})

    options = Database(settings)._engine_options()

    assert options["pool_size"] == 10
    assert options["pool_size"] + options["max_overflow"] == 100
    assert options["pool_recycle"] == 3600


def test_engine_unavailable_before_connect(test_settings):
    database = Database(test_settings)

    with pytest.raises(DatabaseUnavailableError):
        database.engine
    with pytest.raises(DatabaseUnavailableError):
        database.sessionmaker


@pytest.mark.asyncio
async def test_connect_runs_migrator(test_settings):
    migrator = AsyncMock(spec=MetadataMigrator)
    database = Database(test_settings, migrator=migrator)

    await database.connect()
    try:
        migrator.migrate.assert_awaited_once_with(database.engine)
        await database.ping()
    finally:
        await database.dispose()

    with pytest.raises(DatabaseUnavailableError):
        database.engine


@pytest.mark.asyncio
async def test_connect_failure_is_database_unavailable(test_settings, tmp_path):
    settings = test_settings.model_copy(
        update={"DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'quotes.db'}"}
    )
    database = Database(settings)

    with pytest.raises(DatabaseUnavailableError):
        await database.connect()

    with pytest.raises(DatabaseUnavailableError):
        database.sessionmaker
