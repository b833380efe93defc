# src/solid_invoice/infrastructure/persistence/exceptions.py
from typing import Any, Optional

class PersistenceError(Exception):
    """Base exception for persistence-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class StorageError(PersistenceError):
    """Raised when there's an error with local file storage."""
    pass

class RemoteServerError(PersistenceError):
    """Raised when a remote server rejects or fails to receive an invoice."""
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.status_code = status_code

class DatabaseError(PersistenceError):
    """Raised when a database operation fails."""
    pass

class UnsupportedOperationError(PersistenceError):
    """Raised when a save strategy does not support the requested operation."""
    pass
