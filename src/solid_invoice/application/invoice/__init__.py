"""Invoice application services."""

from .service import InvoiceApplicationService

__all__ = ["InvoiceApplicationService"]
