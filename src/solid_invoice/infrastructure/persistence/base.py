"""Persistence strategy interfaces.

Saving and querying are separate capabilities: every strategy can save, only
strategies whose medium can be read back implement InvoiceQueryStrategy.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from solid_invoice.domain.invoice.invoice_aggregate import Invoice


class InvoicePersistenceStrategy(ABC):
    """Persists an invoice to one medium."""

    save_type: str = ""

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        """
        Save an invoice.

        Args:
            invoice: Invoice to persist

        Raises:
            PersistenceError: If the medium rejects or fails to store the invoice
        """

    def cleanup(self) -> None:
        """Release resources held by the strategy."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(save_type='{self.save_type}')"


class InvoiceQueryStrategy(ABC):
    """Reads invoices back from a medium."""

    @abstractmethod
    def find_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """Find an invoice by ID, returning None when absent."""

    @abstractmethod
    def find_all(self) -> List[Invoice]:
        """Return every stored invoice."""
