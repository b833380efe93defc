"""File (JSON document) persistence."""

from .strategy import FilePersistenceStrategy

__all__ = ["FilePersistenceStrategy"]
