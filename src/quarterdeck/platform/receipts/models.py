"""
Canonical receipt models.

``ReceiptData`` is the transaction-kind-agnostic value every assembler
produces and the renderer consumes. It is built fresh per render request
and never mutated afterwards.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import PaidBy, TransactionType


class ReceiptLineItem(BaseModel):
    """A single receipt line.

    ``quantity`` and ``unit_price`` are display-only; ``amount`` is the
    value that totals are built from.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str = Field(description="Line description")
    quantity: int | None = Field(None, description="Displayed quantity")
    unit_price: int | None = Field(None, description="Displayed unit price")
    amount: int = Field(description="Line amount in whole currency units")


class ReceiptData(BaseModel):
    """Canonical receipt record."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    receipt_number: str
    transaction_type: TransactionType
    transaction_category: str = ""
    transaction_id: str = Field("", description="Source record id, display only")
    date: datetime

    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str | None = None

    items: tuple[ReceiptLineItem, ...] = Field(min_length=1)

    subtotal: int = 0
    discount: int | None = None
    discount_description: str | None = None
    total: int = 0

    payment_method: str = ""
    payment_method_label: str = ""
    payment_status: str = ""
    payment_reference: str | None = None

    paid_by: PaidBy = PaidBy.SELF
    payer_details: str | None = None

    notes: str | None = None

    @property
    def is_balanced(self) -> bool:
        """True when ``total == subtotal - discount``."""
        return self.total == self.subtotal - (self.discount or 0)

    @property
    def short_transaction_id(self) -> str:
        return f"{self.transaction_id[:8]}..."


class RenderedReceipt(BaseModel):
    """A rendered receipt document ready for download or storage."""

    model_config = ConfigDict(frozen=True)

    receipt_number: str
    transaction_type: TransactionType
    content: bytes = Field(repr=False)
    media_type: str = "application/pdf"

    @property
    def filename(self) -> str:
        return f"receipt-{self.receipt_number}.pdf"

    @property
    def size(self) -> int:
        return len(self.content)


__all__ = ["ReceiptLineItem", "ReceiptData", "RenderedReceipt"]
