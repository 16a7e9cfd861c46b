"""
Persistence layer exceptions.

Handlers catch RepositoryError and answer 500 database_error; startup treats
DatabaseUnavailableError as fatal.
"""


class RepositoryError(Exception):
    """Raised when a read or write against the quotes table fails."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DatabaseUnavailableError(RepositoryError):
    """Raised when the database cannot be reached, migrated or pinged."""
    pass
