"""
Transaction assemblers.

Each assembler maps one kind of source record (plus optional lookups) onto
``ReceiptData``. They perform no I/O, never mutate their inputs and never
raise for missing lookups or null amounts: a missing facility, event or
tier becomes a generic noun and a null amount becomes zero.
"""

from datetime import datetime

import structlog

from quarterdeck.platform.settings import get_settings

from .clock import local_now
from .enums import PaidBy, TransactionType
from .models import ReceiptData, ReceiptLineItem
from .numbering import (
    BOOKING_SUFFIX,
    EVENT_SUFFIX,
    MEMBERSHIP_SUFFIX,
    ReceiptNumberGenerator,
    default_number_generator,
    kind_prefix,
)
from .payment_methods import canonicalize_payment_method, determine_paid_by
from .records import (
    Booking,
    Event,
    EventRegistration,
    Facility,
    MembershipApplication,
    PricingTier,
)

logger = structlog.get_logger(__name__)

MEMBERSHIP_DISCOUNT_DESCRIPTION = "Membership discount"
CREDITS_PAYER_DETAILS = "Deducted from account credit balance"
PAYMENT_PROOF_REFERENCE = "Payment proof uploaded"
DEFAULT_PAYMENT_STATUS = "PENDING"
DEFAULT_BILLING_PERIOD = "monthly"


def _amount(value: int | None) -> int:
    return value or 0


def _created_at(value: datetime | None) -> datetime:
    return value or local_now()


def _payment_reference(proof_url: str | None) -> str | None:
    return PAYMENT_PROOF_REFERENCE if proof_url else None


def _number_prefix(suffix: str) -> str:
    return kind_prefix(get_settings().receipts.number_prefix, suffix)


def build_booking_receipt(
    booking: Booking,
    facility: Facility | None,
    customer_name: str,
    customer_email: str,
    customer_phone: str | None = None,
    payer_name: str | None = None,
    *,
    number_generator: ReceiptNumberGenerator | None = None,
) -> ReceiptData:
    """
    Assemble a facility booking receipt.

    The booking's stored ``total_price`` is the charged amount; subtotal and
    discount are shown for information and are not used to recompute it.

    Args:
        booking: Booking record
        facility: Booked facility, if it could be looked up
        customer_name: Display name of the account holder
        customer_email: Account holder email
        customer_phone: Account holder phone
        payer_name: Display name of the delegate member who paid, if any
        number_generator: Used only when the booking has no stored receipt number

    Returns:
        Canonical receipt data
    """
    base_price = _amount(booking.base_price)
    discount = _amount(booking.discount)
    add_on_total = _amount(booking.add_on_total)
    total = _amount(booking.total_price)
    facility_name = facility.name if facility and facility.name else None

    description = f"{facility_name or 'Facility'} Booking"
    if booking.date:
        description = f"{description} - {booking.date}"

    items = [
        ReceiptLineItem(
            description=description,
            quantity=1,
            unit_price=base_price,
            amount=base_price,
        )
    ]
    if add_on_total > 0:
        items.append(
            ReceiptLineItem(
                description="Add-ons",
                quantity=1,
                unit_price=add_on_total,
                amount=add_on_total,
            )
        )

    payment_method = booking.payment_method or "cash"
    paid_by = determine_paid_by(payment_method, booking.payer_type)
    payer_details = None
    if paid_by is PaidBy.OTHER_MEMBER and booking.payer_membership_number:
        member = f"Member #{booking.payer_membership_number}"
        payer_details = f"{payer_name} ({member})" if payer_name else member
    elif paid_by is PaidBy.CREDITS:
        payer_details = CREDITS_PAYER_DETAILS

    receipt_number = booking.receipt_number
    if not receipt_number:
        generator = number_generator or default_number_generator
        receipt_number = generator.generate(_number_prefix(BOOKING_SUFFIX))
        logger.debug(
            "receipt.booking.number_generated",
            booking_id=booking.id,
            receipt_number=receipt_number,
        )

    receipt = ReceiptData(
        receipt_number=receipt_number,
        transaction_type=TransactionType.BOOKING,
        transaction_category=f"Facility Booking - {facility_name or 'Sports Facility'}",
        transaction_id=booking.id or "",
        date=_created_at(booking.created_at),
        customer_name=customer_name or "",
        customer_email=customer_email or "",
        customer_phone=customer_phone,
        items=items,
        subtotal=base_price + add_on_total,
        discount=discount if discount > 0 else None,
        discount_description=MEMBERSHIP_DISCOUNT_DESCRIPTION if discount > 0 else None,
        total=total,
        payment_method=payment_method,
        payment_method_label=canonicalize_payment_method(payment_method).label,
        payment_status=booking.payment_status or DEFAULT_PAYMENT_STATUS,
        payment_reference=_payment_reference(booking.payment_proof_url),
        paid_by=paid_by,
        payer_details=payer_details,
        notes=f"Time slot: {booking.start_time or ''} - {booking.end_time or ''}",
    )

    if not receipt.is_balanced:
        logger.warning(
            "receipt.booking.total_mismatch",
            booking_id=booking.id,
            subtotal=receipt.subtotal,
            discount=receipt.discount,
            total=receipt.total,
        )

    return receipt


def build_event_registration_receipt(
    registration: EventRegistration,
    event: Event | None,
    *,
    number_generator: ReceiptNumberGenerator | None = None,
) -> ReceiptData:
    """Assemble an event registration receipt.

    The price per head comes from the event, then the registration's
    recorded payment, then zero. Guests pay the same price as the registrant.
    """
    unit_price = (event.price if event else None) or registration.payment_amount or 0
    guest_count = _amount(registration.guest_count)
    total = unit_price * (1 + guest_count)
    title = event.title if event and event.title else "Event"

    items = [
        ReceiptLineItem(
            description=f"{title} Registration",
            quantity=1,
            unit_price=unit_price,
            amount=unit_price,
        )
    ]
    if guest_count > 0:
        items.append(
            ReceiptLineItem(
                description=f"Guest Registration ({guest_count} guests)",
                quantity=guest_count,
                unit_price=unit_price,
                amount=unit_price * guest_count,
            )
        )

    notes = None
    if event:
        notes = f"Event: {event.schedule_day or ''} {event.schedule_time or ''}".strip()
    else:
        logger.debug("receipt.event.lookup_missing", registration_id=registration.id)

    payment_method = registration.payment_method or "cash"
    generator = number_generator or default_number_generator

    return ReceiptData(
        receipt_number=generator.generate(_number_prefix(EVENT_SUFFIX)),
        transaction_type=TransactionType.EVENT_REGISTRATION,
        transaction_category=f"Event Registration - {title}",
        transaction_id=registration.id or "",
        date=_created_at(registration.created_at),
        customer_name=registration.full_name or "",
        customer_email=registration.email or "",
        customer_phone=registration.phone,
        items=items,
        subtotal=total,
        total=total,
        payment_method=payment_method,
        payment_method_label=canonicalize_payment_method(payment_method).label,
        payment_status=registration.payment_status or DEFAULT_PAYMENT_STATUS,
        payment_reference=_payment_reference(registration.payment_proof_url),
        paid_by=PaidBy.SELF,
        notes=notes,
    )


def build_membership_receipt(
    application: MembershipApplication,
    tier: PricingTier | None,
    customer_name: str,
    customer_email: str,
    customer_phone: str | None = None,
    *,
    number_generator: ReceiptNumberGenerator | None = None,
) -> ReceiptData:
    """Assemble a membership payment receipt."""
    price = application.payment_amount or (tier.price if tier else None) or 0
    tier_name = (tier.name if tier else None) or application.tier_desired or "Standard"
    billing_period = (tier.billing_period if tier else None) or DEFAULT_BILLING_PERIOD
    payment_method = application.payment_method or "bank_transfer"
    generator = number_generator or default_number_generator

    return ReceiptData(
        receipt_number=generator.generate(_number_prefix(MEMBERSHIP_SUFFIX)),
        transaction_type=TransactionType.MEMBERSHIP,
        transaction_category=f"Membership Payment - {tier_name} Tier",
        transaction_id=application.id or "",
        date=_created_at(application.created_at),
        customer_name=customer_name or "",
        customer_email=customer_email or "",
        customer_phone=customer_phone,
        items=[
            ReceiptLineItem(
                description=f"{tier_name} Membership",
                quantity=1,
                unit_price=price,
                amount=price,
            )
        ],
        subtotal=price,
        total=price,
        payment_method=payment_method,
        payment_method_label=canonicalize_payment_method(payment_method).label,
        payment_status=application.status or DEFAULT_PAYMENT_STATUS,
        payment_reference=_payment_reference(application.payment_proof_url),
        paid_by=PaidBy.SELF,
        notes=f"Billing: {billing_period}",
    )


__all__ = [
    "build_booking_receipt",
    "build_event_registration_receipt",
    "build_membership_receipt",
    "MEMBERSHIP_DISCOUNT_DESCRIPTION",
    "CREDITS_PAYER_DETAILS",
]
