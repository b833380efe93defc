"""
Remote server persistence strategy.

Posts each invoice as JSON to an HTTP endpoint. The medium is write-only:
invoices cannot be read back through this strategy.
"""

from typing import Dict, Optional

import requests

from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import InvoicePersistenceStrategy
from solid_invoice.infrastructure.persistence.exceptions import RemoteServerError

logger = get_logger(__name__)


class ServerPersistenceStrategy(InvoicePersistenceStrategy):
    """Sends invoices to a remote server."""

    save_type = SaveType.SERVER.value

    def __init__(self, url: str, timeout_seconds: float = 10.0,
                 api_token: Optional[str] = None,
                 headers: Optional[Dict[str, str]] = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        if api_token:
            self.headers["Authorization"] = f"Bearer {api_token}"

    def save(self, invoice: Invoice) -> None:
        """
        POST the invoice to the configured URL.

        Not idempotent: saving the same invoice twice sends two requests.

        Raises:
            RemoteServerError: On transport failure or a non-2xx response
        """
        try:
            response = requests.post(
                self.url,
                json=invoice.to_dict(),
                headers=self.headers,
                timeout=self.timeout_seconds,
                allow_redirects=False,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(
                f"Server rejected invoice {invoice.invoice_id}",
                url=self.url,
                status_code=status_code,
            )
            raise RemoteServerError(
                f"Server at {self.url} rejected invoice {invoice.invoice_id}: {e}",
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            logger.error(
                f"Failed to reach server for invoice {invoice.invoice_id}: {e}",
                url=self.url,
            )
            raise RemoteServerError(
                f"Failed to send invoice {invoice.invoice_id} to {self.url}: {e}"
            ) from e

        # Only 2xx counts as accepted; raise_for_status lets 3xx through
        if not 200 <= response.status_code < 300:
            logger.error(
                f"Server did not accept invoice {invoice.invoice_id}",
                url=self.url,
                status_code=response.status_code,
            )
            raise RemoteServerError(
                f"Server at {self.url} answered {response.status_code} for invoice {invoice.invoice_id}",
                status_code=response.status_code,
            )

        logger.info(
            f"Sent invoice {invoice.invoice_id} to server",
            url=self.url,
            status_code=response.status_code,
        )
