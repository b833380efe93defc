"""DynamoDB persistence strategy."""

import json
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import (
    InvoicePersistenceStrategy,
    InvoiceQueryStrategy,
)
from solid_invoice.infrastructure.persistence.exceptions import DatabaseError


def to_dynamodb_item(data: Dict[str, Any]) -> Dict[str, Any]:
    """DynamoDB rejects floats, so numbers are stored as Decimal."""
    return json.loads(json.dumps(data), parse_float=Decimal)


def from_dynamodb_item(item: Any) -> Any:
    if isinstance(item, Decimal):
        return float(item)
    if isinstance(item, dict):
        return {key: from_dynamodb_item(value) for key, value in item.items()}
    if isinstance(item, list):
        return [from_dynamodb_item(value) for value in item]
    return item


class DynamoDBPersistenceStrategy(InvoicePersistenceStrategy, InvoiceQueryStrategy):
    """
    Saves invoices to a DynamoDB table with ``invoice_id`` as partition key.

    Registered as the ``dynamodb`` save type next to the built-in media,
    without changes to any of them.
    """

    save_type = SaveType.DYNAMODB.value

    def __init__(self, table_name: str, region: str = "us-east-1",
                 profile: Optional[str] = None, endpoint_url: Optional[str] = None,
                 create_table: bool = True):
        """
        Initialize DynamoDB strategy.

        Args:
            table_name: DynamoDB table name
            region: AWS region
            profile: AWS profile name
            endpoint_url: Custom endpoint, e.g. DynamoDB Local
            create_table: Create the table if it does not exist
        """
        self.logger = get_logger(__name__)
        self.table_name = table_name
        self.region = region

        session = boto3.session.Session(profile_name=profile, region_name=region)
        self.client = session.client("dynamodb", endpoint_url=endpoint_url)
        self.table = session.resource("dynamodb", endpoint_url=endpoint_url).Table(table_name)

        if create_table:
            self._initialize_table()

        self.logger.debug(f"Initialized DynamoDB persistence strategy for table {table_name}")

    def _initialize_table(self) -> None:
        """Create the invoice table if it doesn't exist."""
        try:
            existing = self.client.list_tables()["TableNames"]
            if self.table_name in existing:
                return

            self.client.create_table(
                TableName=self.table_name,
                KeySchema=[{"AttributeName": "invoice_id", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "invoice_id", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
            self.client.get_waiter("table_exists").wait(TableName=self.table_name)
            self.logger.info(f"Created DynamoDB table: {self.table_name}")
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Failed to initialize table {self.table_name}: {e}")
            raise DatabaseError(f"Failed to initialize DynamoDB table {self.table_name}: {e}") from e

    def save(self, invoice: Invoice) -> None:
        try:
            self.table.put_item(Item=to_dynamodb_item(invoice.to_dict()))
        except (ClientError, BotoCoreError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to save invoice {invoice.invoice_id}: {e}")
            raise DatabaseError(f"Failed to save invoice {invoice.invoice_id} to DynamoDB: {e}") from e

        self.logger.info(f"Saved invoice {invoice.invoice_id} to DynamoDB table {self.table_name}")

    def find_by_id(self, invoice_id: str) -> Optional[Invoice]:
        try:
            response = self.table.get_item(Key={"invoice_id": invoice_id})
        except (ClientError, BotoCoreError) as e:
            raise DatabaseError(f"Failed to read invoice {invoice_id} from DynamoDB: {e}") from e

        item = response.get("Item")
        if item is None:
            return None
        return Invoice.from_dict(from_dynamodb_item(item))

    def find_all(self) -> List[Invoice]:
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        except (ClientError, BotoCoreError) as e:
            raise DatabaseError(f"Failed to scan DynamoDB table {self.table_name}: {e}") from e

        return [Invoice.from_dict(from_dynamodb_item(item)) for item in items]
