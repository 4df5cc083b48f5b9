"""Shared fixtures for receipt tests."""

from datetime import datetime

import pytest

from quarterdeck.platform.receipts.enums import PaidBy, TransactionType
from quarterdeck.platform.receipts.models import ReceiptData, ReceiptLineItem
from quarterdeck.platform.receipts.pdf_generator_reportlab import ReportLabReceiptGenerator
from quarterdeck.platform.receipts.records import (
    Booking,
    Event,
    EventRegistration,
    Facility,
    MembershipApplication,
    PricingTier,
)


class FixedNumberGenerator:
    """Receipt number generator that records the prefixes it was asked for."""

    def __init__(self, suffix: str = "7K2XQ", stamp: str = "20250413") -> None:
        self.suffix = suffix
        self.stamp = stamp
        self.prefixes: list[str] = []

    def generate(self, prefix: str) -> str:
        self.prefixes.append(prefix)
        return f"{prefix}-{self.stamp}-{self.suffix}"


@pytest.fixture
def number_generator():
    return FixedNumberGenerator()


@pytest.fixture
def facility():
    return Facility(id="fac_padel", name="Padel Tennis")


@pytest.fixture
def booking():
    """Booking with a membership discount and add-ons."""
    return Booking(
        id="b7a1c2d3-4e5f-6789-abcd-ef0123456789",
        date="2025-04-13",
        start_time="18:00",
        end_time="19:00",
        payment_method="cash",
        payment_status="PAID",
        payer_type="SELF",
        base_price=6000,
        discount=1000,
        add_on_total=1000,
        total_price=6000,
        receipt_number="QD-BK-20250401-AB12C",
        created_at=datetime(2025, 4, 1, 9, 15),
    )


@pytest.fixture
def event():
    return Event(
        id="evt_1",
        title="Sunset Yoga",
        price=2000,
        schedule_day="Saturday",
        schedule_time="6:00 PM",
    )


@pytest.fixture
def registration():
    return EventRegistration(
        id="reg_0123456789",
        full_name="Ayesha Khan",
        email="ayesha@example.com",
        phone="+92 300 1234567",
        guest_count=2,
        payment_amount=1500,
        payment_method="BANK_TRANSFER",
        payment_status="VERIFIED",
        created_at=datetime(2025, 4, 10, 12, 0),
    )


@pytest.fixture
def pricing_tier():
    return PricingTier(id="tier_gold", name="Gold", price=15000, billing_period="quarterly")


@pytest.fixture
def application():
    return MembershipApplication(
        id="app_98765432",
        tier_desired="Gold",
        payment_amount=None,
        payment_method=None,
        status="PENDING",
        created_at=datetime(2025, 3, 30, 16, 45),
    )


@pytest.fixture
def receipt_data():
    """Fully populated booking receipt."""
    return ReceiptData(
        receipt_number="QD-BK-20250413-7K2XQ",
        transaction_type=TransactionType.BOOKING,
        transaction_category="Facility Booking - Padel Tennis",
        transaction_id="b7a1c2d3-4e5f-6789-abcd-ef0123456789",
        date=datetime(2025, 4, 13, 18, 0),
        customer_name="Bilal Ahmed",
        customer_email="bilal@example.com",
        customer_phone="+92 321 7654321",
        items=[
            ReceiptLineItem(
                description="Padel Tennis Booking - 2025-04-13",
                quantity=1,
                unit_price=6000,
                amount=6000,
            ),
            ReceiptLineItem(description="Add-ons", quantity=1, unit_price=1000, amount=1000),
        ],
        subtotal=7000,
        discount=1000,
        discount_description="Membership discount",
        total=6000,
        payment_method="cash",
        payment_method_label="Cash Payment",
        payment_status="PAID",
        payment_reference="Payment proof uploaded",
        paid_by=PaidBy.OTHER_MEMBER,
        payer_details="Sara Malik - Member #QD-1042",
        notes="Time slot: 18:00 - 19:00",
    )


@pytest.fixture
def pdf_generator():
    """Generator with uncompressed page streams so drawn text is searchable."""
    return ReportLabReceiptGenerator(compress=False)
