"""
Receipt engine exceptions.

Assemblers never raise for missing lookups or null amounts; the only hard
failure in the engine is a rendering fault, which callers surface as a
generic "could not generate receipt" condition.
"""

from typing import Any


class ReceiptError(Exception):
    """
    Base receipt error with enhanced context.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for API responses
        status_code: HTTP status code for this error type
        context: Additional context data about the error
        recovery_hint: Suggested action to resolve the error
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int = 400,
        context: dict[str, Any] | None = None,
        recovery_hint: str | None = None,
    ):
        self.message = message
        self.error_code = error_code or "RECEIPT_ERROR"
        self.status_code = status_code
        self.context = context or {}
        self.recovery_hint = recovery_hint
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
            "recovery_hint": self.recovery_hint,
        }


class ReceiptRenderError(ReceiptError):
    """The PDF writer failed; no document bytes were produced."""

    def __init__(self, message: str, receipt_number: str | None = None) -> None:
        context = {}
        if receipt_number:
            context["receipt_number"] = receipt_number

        super().__init__(
            message,
            "RECEIPT_RENDER_FAILED",
            status_code=500,
            context=context,
            recovery_hint="Retry the render; the receipt data itself is unchanged",
        )


class ReceiptGenerationError(ReceiptError):
    """User-facing failure reported when a receipt could not be produced."""

    def __init__(
        self,
        message: str = "Could not generate receipt",
        transaction_type: str | None = None,
        transaction_id: str | None = None,
    ):
        context = {}
        if transaction_type:
            context["transaction_type"] = transaction_type
        if transaction_id:
            context["transaction_id"] = transaction_id

        super().__init__(
            message,
            "RECEIPT_GENERATION_FAILED",
            status_code=500,
            context=context,
            recovery_hint="Try again later or contact the front desk for a printed receipt",
        )


class UnsupportedTransactionError(ReceiptError):
    """No assembler exists for the requested transaction type."""

    def __init__(self, transaction_type: str) -> None:
        super().__init__(
            f"Receipts are not supported for transaction type {transaction_type}",
            "UNSUPPORTED_TRANSACTION",
            status_code=400,
            context={"transaction_type": transaction_type},
        )


__all__ = [
    "ReceiptError",
    "ReceiptRenderError",
    "ReceiptGenerationError",
    "UnsupportedTransactionError",
]
