"""File persistence strategy storing invoices in a JSON document."""

import threading
from typing import Any, Dict, List, Optional

from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import (
    InvoicePersistenceStrategy,
    InvoiceQueryStrategy,
)
from solid_invoice.infrastructure.persistence.components import FileManager, JSONSerializer
from solid_invoice.infrastructure.persistence.exceptions import StorageError


class FilePersistenceStrategy(InvoicePersistenceStrategy, InvoiceQueryStrategy):
    """
    Saves invoices to a JSON file keyed by invoice ID.

    Orchestrates the file manager (atomic writes, backups) and the JSON
    serializer. Saving an invoice whose ID is already stored replaces it.
    """

    save_type = SaveType.FILE.value

    def __init__(self, file_path: str, create_dirs: bool = True, backup_count: int = 5):
        """
        Initialize file persistence strategy.

        Args:
            file_path: Path to the JSON file
            create_dirs: Whether to create parent directories
            backup_count: Number of backups kept before each write
        """
        self.logger = get_logger(__name__)
        self.file_manager = FileManager(file_path, create_dirs, backup_count)
        self.serializer = JSONSerializer()
        self._lock = threading.RLock()

        self.logger.debug(f"Initialized file persistence strategy at {file_path}")

    @property
    def file_path(self) -> str:
        return str(self.file_manager.file_path)

    def save(self, invoice: Invoice) -> None:
        """
        Save an invoice to the JSON file.

        Args:
            invoice: Invoice to save

        Raises:
            StorageError: If the file cannot be read or written
        """
        with self._lock:
            all_data = self._load_data()
            all_data[invoice.invoice_id] = invoice.to_dict()
            self._save_data(all_data)

        self.logger.info(f"Saved invoice {invoice.invoice_id} to {self.file_path}")

    def find_by_id(self, invoice_id: str) -> Optional[Invoice]:
        with self._lock:
            entity_data = self._load_data().get(invoice_id)

        if entity_data is None:
            self.logger.debug(f"Invoice not found in file: {invoice_id}")
            return None
        return Invoice.from_dict(entity_data)

    def find_all(self) -> List[Invoice]:
        with self._lock:
            all_data = self._load_data()
        self.logger.debug(f"Loaded {len(all_data)} invoices from {self.file_path}")
        return [Invoice.from_dict(data) for data in all_data.values()]

    def _load_data(self) -> Dict[str, Dict[str, Any]]:
        """Load the invoice document, restoring the latest backup if it is corrupt."""
        try:
            return self._parse(self.file_manager.read_file())
        except OSError as e:
            self.logger.error(f"Failed to read {self.file_path}: {e}")
            raise StorageError(f"Failed to read invoice file {self.file_path}: {e}") from e
        except ValueError as e:
            self.logger.error(f"Invalid invoice file {self.file_path}: {e}")
            if not self.file_manager.recover_from_backup():
                raise StorageError(f"Invoice file {self.file_path} is corrupt and has no backup") from e

        try:
            return self._parse(self.file_manager.read_file())
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to recover invoice file {self.file_path}: {e}") from e

    def _parse(self, content: str) -> Dict[str, Dict[str, Any]]:
        if not content.strip():
            return {}
        data = self.serializer.deserialize(content)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object keyed by invoice ID")
        return data

    def _save_data(self, data: Dict[str, Dict[str, Any]]) -> None:
        try:
            self.file_manager.create_backup()
            self.file_manager.write_file(self.serializer.serialize(data))
        except (OSError, ValueError) as e:
            self.logger.error(f"Failed to write {self.file_path}: {e}")
            raise StorageError(f"Failed to write invoice file {self.file_path}: {e}") from e
