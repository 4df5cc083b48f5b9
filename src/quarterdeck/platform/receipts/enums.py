"""Receipt enumerations."""

from enum import Enum


class TransactionType(str, Enum):
    """Kind of transaction a receipt documents."""

    BOOKING = "BOOKING"
    EVENT_REGISTRATION = "EVENT_REGISTRATION"
    MEMBERSHIP = "MEMBERSHIP"
    CREDIT_TOPUP = "CREDIT_TOPUP"  # reserved, no assembler yet

    @property
    def label(self) -> str:
        return _TRANSACTION_TYPE_LABELS[self]


_TRANSACTION_TYPE_LABELS = {
    TransactionType.BOOKING: "Facility Booking",
    TransactionType.EVENT_REGISTRATION: "Event Registration",
    TransactionType.MEMBERSHIP: "Membership Payment",
    TransactionType.CREDIT_TOPUP: "Credit Balance Top-up",
}


class PaidBy(str, Enum):
    """Who economically bears the charge."""

    SELF = "self"
    OTHER_MEMBER = "other_member"
    CREDITS = "credits"

    @property
    def label(self) -> str:
        return _PAID_BY_LABELS[self]


_PAID_BY_LABELS = {
    PaidBy.SELF: "Self",
    PaidBy.OTHER_MEMBER: "Another Member",
    PaidBy.CREDITS: "Credit Balance",
}


class PaymentMethod(str, Enum):
    """Canonical payment methods.

    ``UNKNOWN`` marks a raw code with no mapping; the raw value is kept
    alongside it for display.
    """

    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CREDITS = "credits"
    CARD = "card"
    UNKNOWN = "unknown"


__all__ = ["TransactionType", "PaidBy", "PaymentMethod"]
