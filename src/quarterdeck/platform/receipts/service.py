"""
Receipt service.

Selects the assembler for a transaction, renders the result and maps any
rendering failure onto the user-facing ``ReceiptGenerationError``. Storing
the bytes, and persisting a booking's receipt number, is left to callers.
"""

import asyncio
from typing import Any

from quarterdeck.platform.logging import get_logger
from quarterdeck.platform.settings import ReceiptSettings, get_settings

from .assemblers import (
    build_booking_receipt,
    build_event_registration_receipt,
    build_membership_receipt,
)
from .enums import TransactionType
from .exceptions import ReceiptGenerationError, ReceiptRenderError, UnsupportedTransactionError
from .generators import ReceiptGenerator
from .models import ReceiptData, RenderedReceipt
from .numbering import ReceiptNumberGenerator, default_number_generator
from .pdf_generator_reportlab import ReportLabReceiptGenerator
from .records import (
    Booking,
    Event,
    EventRegistration,
    Facility,
    MembershipApplication,
    PricingTier,
)

logger = get_logger(__name__)


class ReceiptService:
    """Assemble and render transaction receipts."""

    def __init__(
        self,
        pdf_generator: ReceiptGenerator | None = None,
        number_generator: ReceiptNumberGenerator | None = None,
        config: ReceiptSettings | None = None,
    ) -> None:
        self.config = config or get_settings().receipts
        self.pdf_generator = pdf_generator or ReportLabReceiptGenerator(config=self.config)
        self.number_generator = number_generator or default_number_generator

    async def booking_receipt(
        self,
        booking: Booking,
        facility: Facility | None,
        customer_name: str,
        customer_email: str,
        customer_phone: str | None = None,
        payer_name: str | None = None,
    ) -> RenderedReceipt:
        """
        Render a facility booking receipt.

        When the booking carries no receipt number a new one is generated;
        callers should persist ``RenderedReceipt.receipt_number`` back onto
        the booking so later renders reuse it.
        """
        receipt = build_booking_receipt(
            booking,
            facility,
            customer_name,
            customer_email,
            customer_phone,
            payer_name,
            number_generator=self.number_generator,
        )
        return await self.render(receipt)

    async def event_registration_receipt(
        self,
        registration: EventRegistration,
        event: Event | None,
    ) -> RenderedReceipt:
        """Render an event registration receipt."""
        receipt = build_event_registration_receipt(
            registration,
            event,
            number_generator=self.number_generator,
        )
        return await self.render(receipt)

    async def membership_receipt(
        self,
        application: MembershipApplication,
        tier: PricingTier | None,
        customer_name: str,
        customer_email: str,
        customer_phone: str | None = None,
    ) -> RenderedReceipt:
        """Render a membership payment receipt."""
        receipt = build_membership_receipt(
            application,
            tier,
            customer_name,
            customer_email,
            customer_phone,
            number_generator=self.number_generator,
        )
        return await self.render(receipt)

    async def render_for(
        self,
        transaction_type: TransactionType | str,
        record: Any,
        lookup: Any = None,
        **customer: Any,
    ) -> RenderedReceipt:
        """
        Render a receipt choosing the assembler by transaction type.

        Args:
            transaction_type: Kind of transaction
            record: Source record (booking, registration or application)
            lookup: Related facility, event or pricing tier
            **customer: Customer identity keywords for bookings and memberships

        Raises:
            UnsupportedTransactionError: if no assembler handles the type
        """
        try:
            kind = TransactionType(transaction_type)
        except ValueError:
            raise UnsupportedTransactionError(str(transaction_type)) from None

        if kind is TransactionType.BOOKING:
            return await self.booking_receipt(
                Booking.model_validate(record),
                Facility.model_validate(lookup) if lookup is not None else None,
                **customer,
            )
        if kind is TransactionType.EVENT_REGISTRATION:
            return await self.event_registration_receipt(
                EventRegistration.model_validate(record),
                Event.model_validate(lookup) if lookup is not None else None,
            )
        if kind is TransactionType.MEMBERSHIP:
            return await self.membership_receipt(
                MembershipApplication.model_validate(record),
                PricingTier.model_validate(lookup) if lookup is not None else None,
                **customer,
            )
        raise UnsupportedTransactionError(kind.value)

    async def render(self, receipt: ReceiptData) -> RenderedReceipt:
        """
        Render assembled receipt data.

        Raises:
            ReceiptGenerationError: if rendering fails or exceeds the configured timeout
        """
        timeout = self.config.render_timeout_seconds
        try:
            if timeout is None:
                content = await self.pdf_generator.generate(receipt)
            else:
                content = await asyncio.wait_for(self.pdf_generator.generate(receipt), timeout)
        except (ReceiptRenderError, TimeoutError) as e:
            logger.error(
                "receipt.generation_failed",
                receipt_number=receipt.receipt_number,
                transaction_type=receipt.transaction_type.value,
                transaction_id=receipt.transaction_id,
                reason=type(e).__name__,
            )
            raise ReceiptGenerationError(
                transaction_type=receipt.transaction_type.value,
                transaction_id=receipt.transaction_id,
            ) from e

        logger.info(
            "receipt.generated",
            receipt_number=receipt.receipt_number,
            transaction_type=receipt.transaction_type.value,
            transaction_id=receipt.transaction_id,
        )
        return RenderedReceipt(
            receipt_number=receipt.receipt_number,
            transaction_type=receipt.transaction_type,
            content=content,
            media_type=self.pdf_generator.media_type,
        )


__all__ = ["ReceiptService"]
