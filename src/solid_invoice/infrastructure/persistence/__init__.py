"""Persistence strategies for invoices."""

from solid_invoice.infrastructure.persistence.base import (
    InvoicePersistenceStrategy,
    InvoiceQueryStrategy,
)
from solid_invoice.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
    RemoteServerError,
    StorageError,
    UnsupportedOperationError,
)

__all__ = [
    "InvoicePersistenceStrategy",
    "InvoiceQueryStrategy",
    "PersistenceError",
    "StorageError",
    "RemoteServerError",
    "DatabaseError",
    "UnsupportedOperationError",
]
