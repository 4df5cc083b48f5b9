"""
PDF Receipt Generator using ReportLab (Pure Python, no system dependencies).

Draws a fixed, single-page A4 receipt at absolute positions. Drawing is
synchronous and accumulates into an in-memory ``ReceiptDocument``; only
the final save step is awaited, so callers get plain ``bytes`` or a
``ReceiptRenderError`` and never a partial document.
"""

import asyncio
import io
from pathlib import Path

import structlog
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from quarterdeck.platform.settings import ReceiptSettings, get_settings

from .clock import local_now
from .exceptions import ReceiptRenderError
from .formatting import ReceiptFormatter
from .generators import ReceiptGenerator
from .models import ReceiptData

logger = structlog.get_logger(__name__)

# Default settings
DEFAULT_PAGE_SIZE = A4
DEFAULT_MARGIN = 50.0

# Color scheme
PRIMARY_COLOR = colors.HexColor("#0F172A")
ACCENT_COLOR = colors.HexColor("#0EA5E9")
MUTED_COLOR = colors.HexColor("#64748B")
RULE_COLOR = colors.HexColor("#E2E8F0")
SUCCESS_COLOR = colors.HexColor("#10B981")
WARNING_COLOR = colors.HexColor("#F59E0B")

# Built-in Type 1 fonts, Latin-1 only
REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

# Column x positions
LEFT_COL = 50.0
RIGHT_COL = 350.0
META_VALUE_OFFSET = 100.0
CUSTOMER_VALUE_OFFSET = 60.0
QTY_COL = 350.0
UNIT_PRICE_RIGHT = 470.0
AMOUNT_RIGHT = 545.0
DESCRIPTION_WIDTH = 290.0
PAYMENT_VALUE_COL = 150.0
COLUMN_GAP = 10.0

# Vertical positions measured from the top edge
FOOTER_TOP = 750.0
ROW_HEIGHT = 20.0
LINE_HEIGHT = 12.0
PAYMENT_ROW_HEIGHT = 15.0

ELLIPSIS = "..."

STATUS_COLORS = {
    "PAID": SUCCESS_COLOR,
    "VERIFIED": SUCCESS_COLOR,
    "PENDING": WARNING_COLOR,
}

FOOTER_BOILERPLATE = "This is a computer-generated receipt and does not require a signature."


def register_font(path: str) -> str:
    """Register a TrueType font file with ReportLab and return its font name."""
    name = Path(path).stem
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
    return name


def resolve_fonts(config: ReceiptSettings) -> tuple[str, str]:
    """Regular and bold font names for the configured receipt fonts."""
    if not config.font_path:
        return REGULAR_FONT, BOLD_FONT
    regular = register_font(config.font_path)
    bold = register_font(config.bold_font_path) if config.bold_font_path else regular
    return regular, bold


class ReceiptDocument:
    """
    In-memory single-page PDF under construction.

    Positions are given from the top edge of the page and flipped to PDF
    coordinates when drawn.

    The default Helvetica faces only cover Latin-1: other scripts (an Urdu
    customer name, say) draw as placeholder glyphs. Pass TrueType fonts with
    the needed coverage as ``regular_font``/``bold_font`` to render them.
    """

    def __init__(
        self,
        page_size: tuple[float, float],
        margin: float,
        compress: bool,
        regular_font: str = REGULAR_FONT,
        bold_font: str = BOLD_FONT,
    ) -> None:
        self.page_width, self.page_height = page_size
        self.margin = margin
        self.regular_font = regular_font
        self.bold_font = bold_font
        self._buffer = io.BytesIO()
        self._canvas = Canvas(
            self._buffer,
            pagesize=page_size,
            pageCompression=1 if compress else 0,
        )

    @property
    def content_right(self) -> float:
        return self.page_width - self.margin

    def set_metadata(self, title: str, author: str, subject: str) -> None:
        self._canvas.setTitle(title)
        self._canvas.setAuthor(author)
        self._canvas.setSubject(subject)
        self._canvas.setCreator(author)

    def _baseline(self, top: float, size: float) -> float:
        return self.page_height - top - size

    def _use(self, font: str, size: float, color: colors.Color) -> None:
        self._canvas.setFont(font, size)
        self._canvas.setFillColor(color)

    def text(
        self,
        x: float,
        top: float,
        value: str,
        *,
        size: float = 10,
        color: colors.Color = PRIMARY_COLOR,
        font: str | None = None,
        underline: bool = False,
    ) -> None:
        font = font or self.regular_font
        self._use(font, size, color)
        baseline = self._baseline(top, size)
        self._canvas.drawString(x, baseline, value)
        if underline:
            width = pdfmetrics.stringWidth(value, font, size)
            self._canvas.setStrokeColor(color)
            self._canvas.setLineWidth(0.5)
            self._canvas.line(x, baseline - 2, x + width, baseline - 2)

    def text_right(
        self,
        right: float,
        top: float,
        value: str,
        *,
        size: float = 10,
        color: colors.Color = PRIMARY_COLOR,
        font: str | None = None,
    ) -> None:
        self._use(font or self.regular_font, size, color)
        self._canvas.drawRightString(right, self._baseline(top, size), value)

    def text_centered(
        self,
        top: float,
        value: str,
        *,
        size: float = 10,
        color: colors.Color = PRIMARY_COLOR,
        font: str | None = None,
    ) -> None:
        self._use(font or self.regular_font, size, color)
        self._canvas.drawCentredString(self.page_width / 2, self._baseline(top, size), value)

    def fit_to_width(self, value: str, width: float, *, size: float = 10) -> str:
        """Shorten ``value`` with a trailing ellipsis until it fits ``width``."""
        font = self.regular_font
        if pdfmetrics.stringWidth(value, font, size) <= width:
            return value
        while value and pdfmetrics.stringWidth(value + ELLIPSIS, font, size) > width:
            value = value[:-1]
        return value.rstrip() + ELLIPSIS

    def clipped_text(
        self,
        x: float,
        top: float,
        value: str,
        width: float,
        *,
        size: float = 10,
        color: colors.Color = PRIMARY_COLOR,
    ) -> None:
        """Draw a single line cut to ``width``."""
        self.text(x, top, self.fit_to_width(value, width, size=size), size=size, color=color)

    def wrapped_text(
        self,
        x: float,
        top: float,
        value: str,
        width: float,
        *,
        size: float = 10,
        color: colors.Color = PRIMARY_COLOR,
    ) -> int:
        """Draw text wrapped to ``width``; returns the number of lines used."""
        lines = simpleSplit(value, self.regular_font, size, width) or [""]
        for index, line in enumerate(lines):
            self.text(x, top + index * LINE_HEIGHT, line, size=size, color=color)
        return len(lines)

    def rule(self, top: float, x1: float | None = None, x2: float | None = None) -> None:
        y = self.page_height - top
        self._canvas.setStrokeColor(RULE_COLOR)
        self._canvas.setLineWidth(1)
        self._canvas.line(
            self.margin if x1 is None else x1,
            y,
            self.content_right if x2 is None else x2,
            y,
        )

    def finalize(self) -> bytes:
        """Close the page and serialize the document."""
        self._canvas.showPage()
        self._canvas.save()
        pdf_bytes = self._buffer.getvalue()
        self._buffer.close()
        return pdf_bytes


class ReportLabReceiptGenerator(ReceiptGenerator):
    """Generate PDF receipts using ReportLab (pure Python)."""

    media_type = "application/pdf"

    def __init__(
        self,
        page_size: tuple[float, float] = DEFAULT_PAGE_SIZE,
        margin: float = DEFAULT_MARGIN,
        config: ReceiptSettings | None = None,
        formatter: ReceiptFormatter | None = None,
        compress: bool | None = None,
    ) -> None:
        """
        Initialize PDF generator with layout configuration.

        Args:
            page_size: Page size in points
            margin: Page margin in points
            config: Receipt settings; defaults to the global settings
            formatter: Currency/date formatter; defaults to one built from config
            compress: Override page stream compression
        """
        self.page_size = page_size
        self.margin = margin
        self.config = config or get_settings().receipts
        self.formatter = formatter or ReceiptFormatter(
            self.config.currency_code, self.config.locale, self.config.timezone
        )
        self.compress = self.config.compress_pages if compress is None else compress
        self.regular_font, self.bold_font = resolve_fonts(self.config)

    async def generate(self, receipt: ReceiptData) -> bytes:
        return await self.generate_pdf(receipt)

    async def generate_pdf(self, receipt: ReceiptData) -> bytes:
        """
        Render a receipt to PDF bytes.

        Raises:
            ReceiptRenderError: if drawing or serializing the document fails
        """
        try:
            document = self.build_document(receipt)
            pdf_bytes = await asyncio.to_thread(document.finalize)
        except Exception as e:
            logger.error(
                "receipt.pdf.failed",
                receipt_number=receipt.receipt_number,
                error=str(e),
                exc_info=True,
            )
            raise ReceiptRenderError(
                f"Failed to render receipt {receipt.receipt_number}",
                receipt_number=receipt.receipt_number,
            ) from e

        logger.info(
            "receipt.pdf.generated",
            receipt_number=receipt.receipt_number,
            transaction_type=receipt.transaction_type.value,
            size=len(pdf_bytes),
        )
        return pdf_bytes

    def build_document(self, receipt: ReceiptData) -> ReceiptDocument:
        """Lay out every section of the receipt onto a fresh document."""
        document = ReceiptDocument(
            self.page_size,
            self.margin,
            self.compress,
            regular_font=self.regular_font,
            bold_font=self.bold_font,
        )
        document.set_metadata(
            title=f"Receipt - {receipt.receipt_number}",
            author=self.config.organization_name,
            subject=f"{receipt.transaction_type.value} Receipt",
        )

        top = self._draw_masthead(document, self.margin)
        top = self._draw_metadata(document, receipt, top)
        top = self._draw_line_items(document, receipt, top)
        top = self._draw_totals(document, receipt, top)
        top = self._draw_payment_info(document, receipt, top)

        if top > FOOTER_TOP:
            logger.warning(
                "receipt.pdf.content_overflow",
                receipt_number=receipt.receipt_number,
                content_bottom=top,
            )

        self._draw_footer(document)
        return document

    def _draw_masthead(self, document: ReceiptDocument, top: float) -> float:
        document.text_centered(top, self.config.organization_name.upper(), size=24)
        top += 30
        document.text_centered(top, self.config.organization_tagline, color=MUTED_COLOR)
        top += 18
        document.rule(top)
        top += 15
        document.text_centered(top, "RECEIPT", size=18, color=ACCENT_COLOR)
        return top + 30

    def _draw_metadata(self, document: ReceiptDocument, receipt: ReceiptData, top: float) -> float:
        """Receipt details on the left, customer details on the right."""
        category = receipt.transaction_category or receipt.transaction_type.label
        left_rows = [
            ("Receipt Number:", receipt.receipt_number),
            ("Date:", self.formatter.format_date(receipt.date)),
            ("Category:", category),
            ("Transaction ID:", receipt.short_transaction_id),
        ]
        right_rows = [
            ("Customer:", receipt.customer_name),
            ("Email:", receipt.customer_email),
        ]
        if receipt.customer_phone:
            right_rows.append(("Phone:", receipt.customer_phone))

        left_value_col = LEFT_COL + META_VALUE_OFFSET
        right_value_col = RIGHT_COL + CUSTOMER_VALUE_OFFSET

        for index, (label, value) in enumerate(left_rows):
            row_top = top + index * 15
            document.text(LEFT_COL, row_top, label, color=MUTED_COLOR)
            document.clipped_text(
                left_value_col, row_top, value, RIGHT_COL - COLUMN_GAP - left_value_col
            )

        for index, (label, value) in enumerate(right_rows):
            row_top = top + index * 15
            document.text(RIGHT_COL, row_top, label, color=MUTED_COLOR)
            document.clipped_text(
                right_value_col, row_top, value, document.content_right - right_value_col
            )

        top += 80
        document.rule(top)
        return top + 15

    def _draw_line_items(self, document: ReceiptDocument, receipt: ReceiptData, top: float) -> float:
        document.text(LEFT_COL, top, "Transaction Details", size=12, underline=True)
        top += 22

        document.text(LEFT_COL, top, "Description", size=9, color=MUTED_COLOR)
        document.text(QTY_COL, top, "Qty", size=9, color=MUTED_COLOR)
        document.text_right(UNIT_PRICE_RIGHT, top, "Unit Price", size=9, color=MUTED_COLOR)
        document.text_right(AMOUNT_RIGHT, top, "Amount", size=9, color=MUTED_COLOR)
        document.rule(top + 15)

        top += 25
        for item in receipt.items:
            lines = document.wrapped_text(LEFT_COL, top, item.description, DESCRIPTION_WIDTH)
            if item.quantity:
                document.text(QTY_COL, top, str(item.quantity))
            if item.unit_price:
                document.text_right(
                    UNIT_PRICE_RIGHT, top, self.formatter.format_amount(item.unit_price)
                )
            document.text_right(AMOUNT_RIGHT, top, self.formatter.format_amount(item.amount))
            top += max(ROW_HEIGHT, lines * LINE_HEIGHT + 8)

        return top

    def _draw_totals(self, document: ReceiptDocument, receipt: ReceiptData, top: float) -> float:
        document.rule(top + 5, x1=RIGHT_COL)
        top += 15

        document.text(RIGHT_COL, top, "Subtotal:", color=MUTED_COLOR)
        document.text_right(AMOUNT_RIGHT, top, self.formatter.format_amount(receipt.subtotal))
        top += 18

        if receipt.discount and receipt.discount > 0:
            label = "Discount:"
            if receipt.discount_description:
                label = f"Discount ({receipt.discount_description}):"
            document.text(RIGHT_COL, top, label, size=9, color=MUTED_COLOR)
            document.text_right(
                AMOUNT_RIGHT,
                top,
                f"-{self.formatter.format_amount(receipt.discount)}",
                color=SUCCESS_COLOR,
            )
            top += 18

        document.rule(top, x1=RIGHT_COL)
        top += 10

        document.text(RIGHT_COL, top, "TOTAL:", size=12, font=document.bold_font)
        document.text_right(
            AMOUNT_RIGHT,
            top,
            self.formatter.format_amount(receipt.total),
            size=12,
            color=ACCENT_COLOR,
            font=document.bold_font,
        )
        top += 40
        document.rule(top)
        return top + 15

    def _draw_payment_info(
        self, document: ReceiptDocument, receipt: ReceiptData, top: float
    ) -> float:
        document.text(LEFT_COL, top, "Payment Information", size=11, underline=True)
        top += 20

        rows: list[tuple[str, str, colors.Color]] = [
            ("Payment Method:", receipt.payment_method_label or receipt.payment_method, PRIMARY_COLOR),
            ("Payment Status:", receipt.payment_status, self._get_status_color(receipt.payment_status)),
            ("Paid By:", receipt.paid_by.label, PRIMARY_COLOR),
        ]
        if receipt.payer_details:
            rows.append(("Payer Details:", receipt.payer_details, PRIMARY_COLOR))
        if receipt.payment_reference:
            rows.append(("Reference:", receipt.payment_reference, PRIMARY_COLOR))

        value_width = document.content_right - PAYMENT_VALUE_COL
        for label, value, color in rows:
            document.text(LEFT_COL, top, label, color=MUTED_COLOR)
            lines = document.wrapped_text(PAYMENT_VALUE_COL, top, value, value_width, color=color)
            top += PAYMENT_ROW_HEIGHT + (lines - 1) * LINE_HEIGHT

        if receipt.notes:
            top += 10
            document.text(LEFT_COL, top, "Notes:", color=MUTED_COLOR)
            lines = document.wrapped_text(PAYMENT_VALUE_COL, top, receipt.notes, value_width)
            top += lines * LINE_HEIGHT + 3

        return top

    def _draw_footer(self, document: ReceiptDocument) -> None:
        document.rule(FOOTER_TOP)
        now = local_now(self.formatter.tzinfo)
        config = self.config
        lines = [
            f"{config.organization_name} {config.organization_tagline}",
            " | ".join(
                part
                for part in (
                    config.organization_location,
                    config.organization_website,
                    config.organization_email,
                )
                if part
            ),
            FOOTER_BOILERPLATE,
            f"Generated on {self.formatter.format_date(now)} at {self.formatter.format_time(now)}",
        ]
        for index, line in enumerate(lines):
            document.text_centered(FOOTER_TOP + 10 + index * 12, line, size=8, color=MUTED_COLOR)

    @staticmethod
    def _get_status_color(status: str) -> colors.Color:
        """Get color for payment status."""
        return STATUS_COLORS.get((status or "").strip().upper(), MUTED_COLOR)


# Default generator instance
_default_generator: ReportLabReceiptGenerator | None = None


def get_default_generator() -> ReportLabReceiptGenerator:
    """Lazily build the shared generator from the global settings."""
    global _default_generator
    if _default_generator is None:
        _default_generator = ReportLabReceiptGenerator()
    return _default_generator


# Convenience function
async def generate_receipt_pdf(receipt: ReceiptData) -> bytes:
    """Render a receipt to PDF bytes with the default generator."""
    return await get_default_generator().generate_pdf(receipt)


# Export key classes and functions
__all__ = [
    "ReceiptDocument",
    "ReportLabReceiptGenerator",
    "generate_receipt_pdf",
    "get_default_generator",
    "register_font",
]
