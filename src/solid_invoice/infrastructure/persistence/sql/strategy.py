# src/solid_invoice/infrastructure/persistence/sql/strategy.py
import json
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional

from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import (
    InvoicePersistenceStrategy,
    InvoiceQueryStrategy,
)
from solid_invoice.infrastructure.persistence.exceptions import DatabaseError


class LocalDatabasePersistenceStrategy(InvoicePersistenceStrategy, InvoiceQueryStrategy):
    """
    SQLite persistence for invoices.

    Each invoice is one row: the full JSON document plus the ID, save type,
    total and creation time as columns for indexing. A connection is opened
    per operation, so a strategy instance can be shared between threads.
    """

    save_type = SaveType.LOCAL_DATABASE.value

    def __init__(self, db_path: str, table_name: str = "invoices"):
        """
        Initialize local database strategy.

        Args:
            db_path: Path to SQLite database file
            table_name: Table holding invoices; must be a valid identifier
        """
        if not table_name.isidentifier():
            raise ValueError(f"Invalid table name: {table_name}")

        self.logger = get_logger(__name__)
        self.db_path = os.path.expandvars(db_path)
        self.table_name = table_name

        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_database()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success and roll back on error."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise DatabaseError(f"Cannot open database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            self.logger.error(f"Database error on {self.db_path}: {e}")
            raise DatabaseError(f"Database error: {e}") from e
        finally:
            conn.close()

    def _init_database(self) -> None:
        """Create the invoice table and its indexes."""
        with self._get_connection() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.table_name} (
                    id TEXT PRIMARY KEY,
                    save_type TEXT NOT NULL,
                    total REAL NOT NULL,
                    data TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_{self.table_name}_created
                ON {self.table_name}(created_at)
            """)

    def save(self, invoice: Invoice) -> None:
        """Insert or replace the invoice row."""
        data = invoice.to_dict()
        with self._get_connection() as conn:
            conn.execute(
                f"""
                INSERT OR REPLACE INTO {self.table_name}
                (id, save_type, total, data, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (invoice.invoice_id, invoice.save_type, invoice.total,
                 json.dumps(data), data["created_at"])
            )

        self.logger.info(f"Saved invoice {invoice.invoice_id} to {self.db_path}")

    def find_by_id(self, invoice_id: str) -> Optional[Invoice]:
        with self._get_connection() as conn:
            row = conn.execute(
                f"SELECT data FROM {self.table_name} WHERE id = ?",
                (invoice_id,)
            ).fetchone()

        if row is None:
            return None
        return Invoice.from_dict(json.loads(row["data"]))

    def find_all(self) -> List[Invoice]:
        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT data FROM {self.table_name} ORDER BY created_at"
            ).fetchall()

        return [Invoice.from_dict(json.loads(row["data"])) for row in rows]

    def count(self) -> int:
        with self._get_connection() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {self.table_name}").fetchone()[0]
