from solid_invoice.domain.core.exceptions import ResourceNotFoundError


class InvoiceNotFoundError(ResourceNotFoundError):
    """Raised when an invoice cannot be found in the selected medium."""
    def __init__(self, invoice_id: str, save_type: str):
        super().__init__("Invoice", invoice_id)
        self.save_type = save_type
