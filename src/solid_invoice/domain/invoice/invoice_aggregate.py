"""Invoice aggregate - immutable invoice with a total derived at construction."""
import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from solid_invoice.domain.invoice.value_objects import Book, SaveType


class Invoice(BaseModel):
    """
    Invoice for a quantity of one book.

    The total is computed once from price, quantity, discount rate and tax rate
    when the invoice is built and is never recomputed. Any total supplied by
    the caller is replaced by the derived value.

    Immutable model (frozen=True).
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    invoice_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), min_length=1, description="Invoice identifier"
    )
    book: Book = Field(..., description="Book being invoiced")
    quantity: int = Field(..., gt=0, description="Number of copies")
    discount_rate: float = Field(0.0, ge=0, le=1, description="Discount as a fraction of price")
    tax_rate: float = Field(0.0, ge=0, description="Tax as a fraction of the discounted amount")
    save_type: str = Field(SaveType.FILE.value, min_length=1, description="Save-type tag")
    total: float = Field(0.0, description="Derived total, computed at construction")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Creation time (UTC)"
    )

    @field_validator("book", mode="before")
    @classmethod
    def coerce_book(cls, v: Any) -> Any:
        """Accept the serialized {name, price} form."""
        if isinstance(v, dict):
            return Book.from_dict(v)
        return v

    @field_validator("save_type", mode="before")
    @classmethod
    def coerce_save_type(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    @model_validator(mode="after")
    def compute_total(self) -> "Invoice":
        """Derive and freeze the invoice total."""
        price = self.book.price
        total = (price - price * self.discount_rate) * self.quantity * (1 + self.tax_rate)
        if not math.isfinite(total):
            raise ValueError("Invoice total is not a finite number")
        object.__setattr__(self, "total", total)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation used by persistence strategies."""
        return {
            "invoice_id": self.invoice_id,
            "book": self.book.to_dict(),
            "quantity": self.quantity,
            "discount_rate": self.discount_rate,
            "tax_rate": self.tax_rate,
            "save_type": self.save_type,
            "total": self.total,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Invoice":
        return cls.model_validate(data)

    def with_changes(self, **changes: Any) -> "Invoice":
        """
        Build a validated copy with some fields replaced.

        The copy keeps the invoice ID and creation time unless they are
        among the changes, and its total is derived again.
        """
        return type(self).model_validate({**self.to_dict(), **changes})

    def model_copy(self, *, update: Optional[Dict[str, Any]] = None, deep: bool = False) -> "Invoice":
        # An update must go through validation so the total stays derived
        if update:
            return self.with_changes(**update)
        return super().model_copy(deep=deep)
