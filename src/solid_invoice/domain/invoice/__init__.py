"""Invoice domain package."""

from solid_invoice.domain.invoice.exceptions import InvoiceNotFoundError
from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import Book, SaveType

__all__ = [
    "Book",
    "Invoice",
    "InvoiceNotFoundError",
    "SaveType",
]
