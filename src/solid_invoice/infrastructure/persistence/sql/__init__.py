"""Local SQLite database persistence."""

from .strategy import LocalDatabasePersistenceStrategy

__all__ = ["LocalDatabasePersistenceStrategy"]
