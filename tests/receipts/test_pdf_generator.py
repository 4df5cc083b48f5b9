"""Tests for the ReportLab receipt renderer."""

import asyncio
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import reportlab
from pydantic import ValidationError
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from quarterdeck.platform.receipts.clock import local_now
from quarterdeck.platform.receipts.enums import PaidBy, TransactionType
from quarterdeck.platform.receipts.exceptions import ReceiptRenderError
from quarterdeck.platform.receipts.generators import ReceiptGenerator
from quarterdeck.platform.receipts.models import ReceiptLineItem
from quarterdeck.platform.receipts.numbering import RandomReceiptNumberGenerator
from quarterdeck.platform.receipts.pdf_generator_reportlab import (
    BOLD_FONT,
    DEFAULT_MARGIN,
    MUTED_COLOR,
    REGULAR_FONT,
    SUCCESS_COLOR,
    WARNING_COLOR,
    ReceiptDocument,
    ReportLabReceiptGenerator,
    generate_receipt_pdf,
    get_default_generator,
)
from quarterdeck.platform.settings import ReceiptSettings, reset_settings

FONTS_DIR = Path(reportlab.__file__).parent / "fonts"
VERA = FONTS_DIR / "Vera.ttf"
VERA_BOLD = FONTS_DIR / "VeraBd.ttf"


def _text(pdf_bytes: bytes) -> str:
    return pdf_bytes.decode("latin-1")


@pytest.mark.unit
class TestGeneratorInitialization:
    """Test generator initialization and configuration."""

    def test_default_initialization(self):
        generator = ReportLabReceiptGenerator()

        assert generator.page_size == A4
        assert generator.margin == DEFAULT_MARGIN
        assert generator.compress is True
        assert generator.media_type == "application/pdf"
        assert generator.formatter.currency.code == "PKR"

    def test_compression_override(self):
        assert ReportLabReceiptGenerator(compress=False).compress is False

    def test_is_a_receipt_generator(self):
        assert isinstance(ReportLabReceiptGenerator(), ReceiptGenerator)

    def test_base_generator_is_abstract(self):
        with pytest.raises(TypeError):
            ReceiptGenerator()

    def test_default_generator_is_shared(self):
        assert get_default_generator() is get_default_generator()


@pytest.mark.unit
class TestReceiptPDF:
    """Test PDF output."""

    @pytest.mark.asyncio
    async def test_returns_pdf_bytes(self, receipt_data):
        pdf_bytes = await ReportLabReceiptGenerator().generate_pdf(receipt_data)

        assert isinstance(pdf_bytes, bytes)
        assert pdf_bytes.startswith(b"%PDF-")
        assert b"%%EOF" in pdf_bytes[-32:]

    @pytest.mark.asyncio
    async def test_generate_delegates_to_generate_pdf(self, receipt_data, pdf_generator):
        pdf_bytes = await pdf_generator.generate(receipt_data)

        assert pdf_bytes.startswith(b"%PDF-")

    @pytest.mark.asyncio
    async def test_convenience_function(self, receipt_data):
        pdf_bytes = await generate_receipt_pdf(receipt_data)

        assert pdf_bytes.startswith(b"%PDF-")

    @pytest.mark.asyncio
    async def test_masthead_and_metadata(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "THE QUARTERDECK" in content
        assert "Sports & Recreation Complex" in content
        assert "RECEIPT" in content
        assert "QD-BK-20250413-7K2XQ" in content
        assert "13 Apr 2025" in content
        assert "Facility Booking - Padel Tennis" in content

    @pytest.mark.asyncio
    async def test_transaction_id_is_truncated(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "b7a1c2d3..." in content
        assert receipt_data.transaction_id not in content

    @pytest.mark.asyncio
    async def test_customer_details(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "Bilal Ahmed" in content
        assert "bilal@example.com" in content
        assert "Phone:" in content
        assert "+92 321 7654321" in content

    @pytest.mark.asyncio
    async def test_phone_row_omitted_without_phone(self, receipt_data, pdf_generator):
        receipt = receipt_data.model_copy(update={"customer_phone": None})

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert "Phone:" not in content

    @pytest.mark.asyncio
    async def test_line_items_and_totals(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "Transaction Details" in content
        assert "Padel Tennis Booking - 2025-04-13" in content
        assert "Add-ons" in content
        assert "PKR 6,000" in content
        assert "PKR 1,000" in content
        assert "Subtotal:" in content
        assert "PKR 7,000" in content
        assert "-PKR 1,000" in content
        assert "Membership discount" in content
        assert "TOTAL:" in content

    @pytest.mark.asyncio
    async def test_discount_row_omitted_without_discount(self, receipt_data, pdf_generator):
        receipt = receipt_data.model_copy(
            update={"discount": None, "discount_description": None, "total": 7000}
        )

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert "Discount" not in content

    @pytest.mark.asyncio
    async def test_payment_information(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "Payment Information" in content
        assert "Cash Payment" in content
        assert "PAID" in content
        assert "Another Member" in content
        assert "Sara Malik - Member #QD-1042" in content
        assert "Payment proof uploaded" in content
        assert "Time slot: 18:00 - 19:00" in content

    @pytest.mark.asyncio
    async def test_optional_payment_rows_omitted(self, receipt_data, pdf_generator):
        receipt = receipt_data.model_copy(
            update={
                "paid_by": PaidBy.SELF,
                "payer_details": None,
                "payment_reference": None,
                "notes": None,
            }
        )

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert "Self" in content
        assert "Payer Details:" not in content
        assert "Reference:" not in content
        assert "Notes:" not in content

    @pytest.mark.asyncio
    async def test_category_falls_back_to_type_label(self, receipt_data, pdf_generator):
        receipt = receipt_data.model_copy(
            update={
                "transaction_type": TransactionType.MEMBERSHIP,
                "transaction_category": "",
            }
        )

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert "Membership Payment" in content

    @pytest.mark.asyncio
    async def test_footer(self, receipt_data, pdf_generator):
        content = _text(await pdf_generator.generate_pdf(receipt_data))

        assert "Islamabad, Pakistan | www.thequarterdeck.pk | admin@thequarterdeck.pk" in content
        assert "computer-generated receipt" in content
        assert "Generated on" in content

    @pytest.mark.asyncio
    async def test_long_description_is_wrapped(self, receipt_data, pdf_generator):
        long_description = "Championship Court " * 20
        receipt = receipt_data.model_copy(
            update={"items": (ReceiptLineItem(description=long_description, amount=6000),)}
        )

        pdf_bytes = await pdf_generator.generate_pdf(receipt)

        assert pdf_bytes.startswith(b"%PDF-")
        assert long_description.strip() not in _text(pdf_bytes)

    @pytest.mark.asyncio
    async def test_zero_quantity_and_price_cells_skipped(self, receipt_data, pdf_generator):
        receipt = receipt_data.model_copy(
            update={"items": (ReceiptLineItem(description="Walk-in", amount=0),)}
        )

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert "Walk-in" in content
        assert "PKR 0" in content

    @pytest.mark.asyncio
    async def test_concurrent_renders_are_independent(self, receipt_data, pdf_generator):
        receipts = [
            receipt_data.model_copy(update={"receipt_number": f"QD-BK-20250413-0000{i}"})
            for i in range(5)
        ]

        results = await asyncio.gather(*(pdf_generator.generate_pdf(r) for r in receipts))

        for receipt, pdf_bytes in zip(receipts, results, strict=True):
            content = _text(pdf_bytes)
            assert receipt.receipt_number in content
            others = {r.receipt_number for r in receipts} - {receipt.receipt_number}
            assert not any(other in content for other in others)


@pytest.mark.unit
class TestRenderFailures:
    """Writer faults reject the whole render."""

    @pytest.mark.asyncio
    async def test_finalize_failure_raises_render_error(
        self, receipt_data, pdf_generator, monkeypatch
    ):
        def broken_finalize(self):
            raise OSError("disk full")

        monkeypatch.setattr(ReceiptDocument, "finalize", broken_finalize)

        with pytest.raises(ReceiptRenderError) as exc_info:
            await pdf_generator.generate_pdf(receipt_data)

        error = exc_info.value
        assert isinstance(error.__cause__, OSError)
        assert error.error_code == "RECEIPT_RENDER_FAILED"
        assert error.status_code == 500
        assert error.context == {"receipt_number": receipt_data.receipt_number}

    @pytest.mark.asyncio
    async def test_layout_failure_raises_render_error(
        self, receipt_data, pdf_generator, monkeypatch
    ):
        def broken_masthead(self, document, top):
            raise ValueError("bad font")

        monkeypatch.setattr(ReportLabReceiptGenerator, "_draw_masthead", broken_masthead)

        with pytest.raises(ReceiptRenderError):
            await pdf_generator.generate_pdf(receipt_data)


@pytest.mark.unit
class TestStatusColors:
    """Test payment status colors."""

    @pytest.mark.parametrize(
        ("status", "color"),
        [
            ("PAID", SUCCESS_COLOR),
            ("paid", SUCCESS_COLOR),
            ("VERIFIED", SUCCESS_COLOR),
            ("PENDING", WARNING_COLOR),
            ("Pending", WARNING_COLOR),
            ("REJECTED", MUTED_COLOR),
            ("", MUTED_COLOR),
        ],
    )
    def test_status_color(self, status, color):
        assert ReportLabReceiptGenerator._get_status_color(status) == color


@pytest.fixture
def kiritimati_clock(monkeypatch):
    """Receipt clock far from UTC so a UTC footer lands on another date."""
    monkeypatch.setenv("RECEIPTS__TIMEZONE", "Pacific/Kiritimati")
    reset_settings()
    yield
    monkeypatch.delenv("RECEIPTS__TIMEZONE")
    reset_settings()


@pytest.mark.unit
class TestReceiptClock:
    """Footer, fallback dates and receipt numbers share one clock."""

    @pytest.mark.asyncio
    async def test_footer_agrees_with_receipt_number_date(self, receipt_data, kiritimati_clock):
        number = RandomReceiptNumberGenerator().generate("QD")
        generator = ReportLabReceiptGenerator(compress=False)
        formatter = generator.formatter

        before = local_now(formatter.tzinfo)
        content = _text(
            await generator.generate_pdf(receipt_data.model_copy(update={"receipt_number": number}))
        )
        after = local_now(formatter.tzinfo)

        stamp = datetime.strptime(number.split("-")[1], "%Y%m%d")
        assert f"Generated on {formatter.format_date(stamp)} at" in content
        assert any(
            f"Generated on {formatter.format_date(moment)} at {formatter.format_time(moment)}"
            in content
            for moment in (before, after)
        )

    def test_formatter_follows_configured_zone(self, kiritimati_clock):
        generator = ReportLabReceiptGenerator()

        assert local_now(generator.formatter.tzinfo).utcoffset() == timedelta(hours=14)

    def test_explicit_config_zone(self):
        generator = ReportLabReceiptGenerator(config=ReceiptSettings(timezone="Asia/Karachi"))

        assert local_now(generator.formatter.tzinfo).utcoffset() == timedelta(hours=5)


@pytest.mark.unit
class TestReceiptFonts:
    """TrueType fonts replace the Latin-1 Helvetica faces when configured."""

    def test_helvetica_by_default(self):
        generator = ReportLabReceiptGenerator()

        assert generator.regular_font == REGULAR_FONT
        assert generator.bold_font == BOLD_FONT

    def test_bold_falls_back_to_regular_font(self):
        generator = ReportLabReceiptGenerator(config=ReceiptSettings(font_path=str(VERA)))

        assert generator.regular_font == "Vera"
        assert generator.bold_font == "Vera"

    @pytest.mark.asyncio
    async def test_renders_with_truetype_fonts(self, receipt_data):
        config = ReceiptSettings(font_path=str(VERA), bold_font_path=str(VERA_BOLD))
        generator = ReportLabReceiptGenerator(config=config, compress=False)
        receipt = receipt_data.model_copy(update={"customer_name": "عائشہ خان"})

        pdf_bytes = await generator.generate_pdf(receipt)

        assert generator.bold_font == "VeraBd"
        assert pdf_bytes.startswith(b"%PDF-")
        assert b"Vera" in pdf_bytes

    def test_missing_font_file_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            ReceiptSettings(font_path=str(tmp_path / "none.ttf"))


@pytest.mark.unit
class TestLongValues:
    """Single-line values stay inside their column."""

    @pytest.fixture
    def document(self):
        return ReceiptDocument(A4, DEFAULT_MARGIN, compress=False)

    def test_fit_to_width_keeps_short_values(self, document):
        assert document.fit_to_width("Padel Tennis", 190) == "Padel Tennis"

    def test_fit_to_width_shortens_long_values(self, document):
        value = "Facility Booking - Championship Centre Court with Floodlights"

        fitted = document.fit_to_width(value, 190)

        assert fitted.endswith("...")
        assert value.startswith(fitted[:-3])
        assert stringWidth(fitted, REGULAR_FONT, 10) <= 190

    @pytest.mark.asyncio
    async def test_long_metadata_values_are_clipped(self, receipt_data, pdf_generator, document):
        category = "Facility Booking - Championship Centre Court with Floodlights"
        email = "reservations.department@thequarterdeck-sports-complex.pk"
        receipt = receipt_data.model_copy(
            update={"transaction_category": category, "customer_email": email}
        )

        content = _text(await pdf_generator.generate_pdf(receipt))

        assert category not in content
        assert email not in content
        assert document.fit_to_width(category, 190) in content
        assert document.fit_to_width(email, 135) in content

    @pytest.mark.asyncio
    async def test_long_payer_details_are_wrapped(self, receipt_data, pdf_generator):
        details = "Sara Malik on behalf of the Islamabad Junior Padel Academy " * 3
        receipt = receipt_data.model_copy(update={"payer_details": details})

        content = _text(await pdf_generator.generate_pdf(receipt))

        lines = simpleSplit(details.strip(), REGULAR_FONT, 10, 395)
        assert len(lines) > 1
        assert details.strip() not in content
        for line in lines:
            assert line in content
        assert "Payment proof uploaded" in content
