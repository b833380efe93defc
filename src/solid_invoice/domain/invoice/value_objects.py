# src/solid_invoice/domain/invoice/value_objects.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Union
from enum import Enum
import math
from solid_invoice.domain.core.exceptions import ValidationError

class SaveType(str, Enum):
    """Built-in save types.

    The set is open: the registry accepts any string tag, these are the ones
    shipped with the package.
    """
    FILE = "file"
    SERVER = "server"
    LOCAL_DATABASE = "local_database"
    DYNAMODB = "dynamodb"

    @classmethod
    def normalize(cls, value: Union["SaveType", str]) -> str:
        """Return the plain string tag for an enum member or string."""
        if isinstance(value, Enum):
            return str(value.value)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Invalid save type: {value!r}")
        return value.strip()

@dataclass(frozen=True)
class Book:
    """Book being invoiced."""
    name: str
    price: float

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Book name must be a non-empty string")
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise ValidationError("Book price must be a number")
        if not math.isfinite(self.price) or self.price < 0:
            raise ValidationError(f"Book price must be finite and non-negative, got {self.price}")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "price": self.price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Book':
        return cls(name=data["name"], price=data["price"])
