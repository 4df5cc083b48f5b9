"""
Payment method canonicalization.

Upstream records carry payment methods and payer types as mixed-case free
text. Known codes map onto ``PaymentMethod``; anything else becomes
``PaymentMethod.UNKNOWN`` with the raw text preserved for display.
"""

from pydantic import BaseModel, ConfigDict

from .enums import PaidBy, PaymentMethod

NOT_SPECIFIED_LABEL = "Not specified"
DELEGATE_PAYER_TYPE = "other"

PAYMENT_METHOD_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.CASH: "Cash Payment",
    PaymentMethod.BANK_TRANSFER: "Bank Transfer",
    PaymentMethod.CREDITS: "Credit Balance",
    PaymentMethod.CARD: "Card Payment",
}


class CanonicalPaymentMethod(BaseModel):
    """A payment method code resolved against the known set."""

    model_config = ConfigDict(frozen=True)

    method: PaymentMethod
    raw: str

    @property
    def label(self) -> str:
        if self.method is PaymentMethod.UNKNOWN:
            return self.raw or NOT_SPECIFIED_LABEL
        return PAYMENT_METHOD_LABELS[self.method]


def canonicalize_payment_method(raw: str | None) -> CanonicalPaymentMethod:
    """Resolve a raw payment method code, case-insensitively."""
    raw = raw or ""
    try:
        method = PaymentMethod(raw.strip().lower())
    except ValueError:
        method = PaymentMethod.UNKNOWN
    return CanonicalPaymentMethod(method=method, raw=raw)


def payment_method_label(raw: str | None) -> str:
    """Display label for a raw payment method code."""
    return canonicalize_payment_method(raw).label


def determine_paid_by(payment_method: str | None, payer_type: str | None) -> PaidBy:
    """Classify who bears a charge.

    The credits channel wins over the payer type; a delegate payer type
    means another member paid; everything else is the account holder.
    """
    if canonicalize_payment_method(payment_method).method is PaymentMethod.CREDITS:
        return PaidBy.CREDITS
    if (payer_type or "").strip().lower() == DELEGATE_PAYER_TYPE:
        return PaidBy.OTHER_MEMBER
    return PaidBy.SELF


__all__ = [
    "CanonicalPaymentMethod",
    "PAYMENT_METHOD_LABELS",
    "canonicalize_payment_method",
    "determine_paid_by",
    "payment_method_label",
]
