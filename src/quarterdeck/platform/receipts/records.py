"""
Read-only views of the records the receipt engine consumes.

These are owned by the booking, event and membership subsystems. Every
field is optional because upstream rows may carry nulls anywhere; the
assemblers substitute safe defaults. ``from_attributes`` lets ORM rows be
validated directly with ``Booking.model_validate(row)``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SourceRecord(BaseModel):
    """Base for upstream records."""

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        extra="ignore",
    )

    id: str | None = Field(None, description="Primary key of the source row")


class Facility(SourceRecord):
    name: str | None = None


class Booking(SourceRecord):
    """Facility booking."""

    date: str | None = Field(None, description="Booked day as stored upstream")
    start_time: str | None = None
    end_time: str | None = None

    payment_method: str | None = None
    payment_status: str | None = None
    payment_proof_url: str | None = None
    payer_type: str | None = Field(None, description="SELF or OTHER")
    payer_membership_number: str | None = None

    base_price: int | None = None
    discount: int | None = None
    add_on_total: int | None = None
    total_price: int | None = Field(None, description="Final charged amount")

    receipt_number: str | None = Field(None, description="Receipt number assigned at booking time")
    created_at: datetime | None = None


class Event(SourceRecord):
    title: str | None = None
    price: int | None = None
    schedule_day: str | None = None
    schedule_time: str | None = None


class EventRegistration(SourceRecord):
    """Registration for an event, carrying the registrant's own contact details."""

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    guest_count: int | None = None

    payment_amount: int | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    payment_proof_url: str | None = None
    created_at: datetime | None = None


class PricingTier(SourceRecord):
    name: str | None = None
    price: int | None = None
    billing_period: str | None = None


class MembershipApplication(SourceRecord):
    tier_desired: str | None = None
    payment_amount: int | None = None
    payment_method: str | None = None
    status: str | None = None
    payment_proof_url: str | None = None
    created_at: datetime | None = None


__all__ = [
    "SourceRecord",
    "Facility",
    "Booking",
    "Event",
    "EventRegistration",
    "PricingTier",
    "MembershipApplication",
]
