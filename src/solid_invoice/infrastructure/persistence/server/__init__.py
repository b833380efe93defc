"""Remote server persistence."""

from .strategy import ServerPersistenceStrategy

__all__ = ["ServerPersistenceStrategy"]
