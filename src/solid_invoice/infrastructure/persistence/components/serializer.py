"""JSON serialization component."""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JSONSerializer:
    """Serializes storage documents to and from JSON text."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def serialize(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, sort_keys=True, allow_nan=False, default=_default)

    def deserialize(self, content: str) -> Any:
        """
        Parse JSON text.

        Raises:
            ValueError: If the content is not valid JSON
        """
        return json.loads(content)
