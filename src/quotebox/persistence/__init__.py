"""
Persistence layer for generated quotes.

Components:
- Database: async engine, pool and schema migration
- QuoteRepository: insert/list/ping operations
- QuoteRecord: ORM model for the quotes table
"""

from quotebox.persistence.database import (
    Database,
    MetadataMigrator,
    SchemaMigrator,
    build_database_url,
)
from quotebox.persistence.exceptions import DatabaseUnavailableError, RepositoryError
from quotebox.persistence.orm import Base, QuoteRecord
from quotebox.persistence.repository import QuoteRepository

__all__ = [
    "Base",
    "Database",
    "DatabaseUnavailableError",
    "MetadataMigrator",
    "QuoteRecord",
    "QuoteRepository",
    "RepositoryError",
    "SchemaMigrator",
    "build_database_url",
]
