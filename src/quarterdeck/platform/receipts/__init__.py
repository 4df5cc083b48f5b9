"""
Transaction receipts.

Turns bookings, event registrations and membership applications into a
canonical ``ReceiptData`` value and renders it as a single-page PDF:

- ``assemblers``: one pure mapping per transaction kind
- ``clock``: the shared receipt clock
- ``numbering``: date-stamped receipt numbers
- ``pdf_generator_reportlab``: fixed-layout ReportLab renderer
- ``service``: assemble + render with user-facing error mapping
"""

from quarterdeck.platform.receipts.assemblers import (
    build_booking_receipt,
    build_event_registration_receipt,
    build_membership_receipt,
)
from quarterdeck.platform.receipts.enums import PaidBy, PaymentMethod, TransactionType
from quarterdeck.platform.receipts.exceptions import (
    ReceiptError,
    ReceiptGenerationError,
    ReceiptRenderError,
    UnsupportedTransactionError,
)
from quarterdeck.platform.receipts.models import ReceiptData, ReceiptLineItem, RenderedReceipt
from quarterdeck.platform.receipts.numbering import (
    RandomReceiptNumberGenerator,
    ReceiptNumberGenerator,
    generate_receipt_number,
)
from quarterdeck.platform.receipts.payment_methods import (
    canonicalize_payment_method,
    determine_paid_by,
    payment_method_label,
)
from quarterdeck.platform.receipts.pdf_generator_reportlab import (
    ReportLabReceiptGenerator,
    generate_receipt_pdf,
)
from quarterdeck.platform.receipts.records import (
    Booking,
    Event,
    EventRegistration,
    Facility,
    MembershipApplication,
    PricingTier,
)
from quarterdeck.platform.receipts.service import ReceiptService

__all__ = [
    # Enums
    "TransactionType",
    "PaidBy",
    "PaymentMethod",
    # Input records
    "Booking",
    "Facility",
    "Event",
    "EventRegistration",
    "MembershipApplication",
    "PricingTier",
    # Receipt models
    "ReceiptData",
    "ReceiptLineItem",
    "RenderedReceipt",
    # Assembly
    "build_booking_receipt",
    "build_event_registration_receipt",
    "build_membership_receipt",
    "canonicalize_payment_method",
    "determine_paid_by",
    "payment_method_label",
    # Numbering
    "ReceiptNumberGenerator",
    "RandomReceiptNumberGenerator",
    "generate_receipt_number",
    # Rendering
    "ReportLabReceiptGenerator",
    "generate_receipt_pdf",
    "ReceiptService",
    # Exceptions
    "ReceiptError",
    "ReceiptRenderError",
    "ReceiptGenerationError",
    "UnsupportedTransactionError",
]
