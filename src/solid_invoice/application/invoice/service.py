"""Invoice application service."""
from typing import List, Optional, Union

from solid_invoice.config.manager import ConfigurationManager
from solid_invoice.domain.invoice.exceptions import InvoiceNotFoundError
from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import Book, SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import (
    InvoicePersistenceStrategy,
    InvoiceQueryStrategy,
)
from solid_invoice.infrastructure.persistence.exceptions import UnsupportedOperationError
from solid_invoice.infrastructure.registry.save_strategy_registry import SaveStrategyRegistry


class InvoiceApplicationService:
    """
    Creates, saves and reads invoices.

    The persistence medium is chosen per invoice by its save type; the service
    resolves the strategy through the registry with the configured settings
    for that save type and never branches on the medium itself.
    """

    def __init__(self, registry: SaveStrategyRegistry, config_manager: ConfigurationManager):
        self._registry = registry
        self._config_manager = config_manager
        self._logger = get_logger(__name__)

    def create_invoice(self,
                       book_name: str,
                       price: float,
                       quantity: int,
                       discount_rate: float = 0.0,
                       tax_rate: float = 0.0,
                       save_type: Optional[Union[SaveType, str]] = None) -> Invoice:
        """
        Build an invoice.

        Args:
            book_name: Book title
            price: Unit price
            quantity: Number of copies
            discount_rate: Discount as a fraction in [0, 1]
            tax_rate: Tax as a non-negative fraction
            save_type: Save type; the configured default is used when omitted

        Returns:
            New invoice with its total computed
        """
        tag = SaveType.normalize(save_type) if save_type is not None \
            else self._config_manager.get_default_save_type()

        invoice = Invoice(
            book=Book(name=book_name, price=price),
            quantity=quantity,
            discount_rate=discount_rate,
            tax_rate=tax_rate,
            save_type=tag,
        )
        self._logger.debug(f"Created invoice {invoice.invoice_id} with total {invoice.total:.2f}")
        return invoice

    def save_invoice(self, invoice: Invoice) -> Invoice:
        """
        Save an invoice with the strategy registered for its save type.

        Raises:
            UnknownSaveTypeError: If the invoice's save type is not registered
            PersistenceError: If the strategy fails to save
        """
        strategy = self._get_strategy(invoice.save_type)
        try:
            strategy.save(invoice)
        finally:
            strategy.cleanup()

        self._logger.info(f"Saved invoice {invoice.invoice_id} using save type '{invoice.save_type}'")
        return invoice

    def get_invoice(self, invoice_id: str, save_type: Union[SaveType, str]) -> Invoice:
        """
        Read an invoice back from a queryable medium.

        Raises:
            InvoiceNotFoundError: If the medium holds no invoice with this ID
            UnsupportedOperationError: If the medium cannot be read
        """
        tag = SaveType.normalize(save_type)
        strategy = self._get_query_strategy(tag)
        invoice = strategy.find_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id, tag)
        return invoice

    def list_invoices(self, save_type: Union[SaveType, str]) -> List[Invoice]:
        """List every invoice stored in a queryable medium."""
        return self._get_query_strategy(SaveType.normalize(save_type)).find_all()

    def available_save_types(self) -> List[str]:
        return self._registry.get_registered_types()

    def _get_strategy(self, save_type: str) -> InvoicePersistenceStrategy:
        settings = self._config_manager.get_strategy_config(save_type)
        if isinstance(settings, dict):
            settings = self._registry.create_config(save_type, settings)
        return self._registry.resolve(save_type, settings)

    def _get_query_strategy(self, save_type: str) -> InvoiceQueryStrategy:
        strategy = self._get_strategy(save_type)
        if not isinstance(strategy, InvoiceQueryStrategy):
            raise UnsupportedOperationError(
                f"Save type '{save_type}' does not support reading invoices back"
            )
        return strategy
