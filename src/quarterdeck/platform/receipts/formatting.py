"""
Money, date and time formatting for receipts using py-moneyed and Babel.

Receipt amounts are whole units of a single configured currency, shown as
the ISO code followed by the grouped amount (``PKR 7,000``).
"""

from datetime import date, datetime, tzinfo

from babel import Locale
from babel.core import UnknownLocaleError
from babel.dates import format_date, format_time
from babel.numbers import format_currency
from moneyed import Currency, Money, get_currency
from moneyed.classes import CurrencyDoesNotExist

from quarterdeck.platform.settings import get_settings

from .clock import resolve_timezone

# Fallback locale when the configured one is unknown to Babel
DEFAULT_LOCALE = "en_US"

# Currency code, a space, thousands-grouped integer
AMOUNT_PATTERN = "¤¤ #,##0"
DATE_PATTERN = "dd MMM yyyy"
TIME_PATTERN = "hh:mm a"


class ReceiptFormatter:
    """Formats receipt values in one currency and locale."""

    def __init__(
        self,
        currency_code: str | None = None,
        locale: str | None = None,
        timezone: str | None = None,
    ) -> None:
        config = get_settings().receipts
        self.currency = self._validate_currency(currency_code or config.currency_code)
        self.locale = self._validate_locale(locale or config.locale)
        self.tzinfo: tzinfo = resolve_timezone(timezone)

    def _validate_currency(self, currency_code: str) -> Currency:
        """Validate and return Currency object."""
        try:
            return get_currency(currency_code.upper())
        except CurrencyDoesNotExist:
            raise ValueError(f"Invalid currency code: {currency_code}")

    def _validate_locale(self, locale_code: str) -> str:
        """Validate locale code."""
        try:
            Locale.parse(locale_code)
            return locale_code
        except (UnknownLocaleError, ValueError):
            return DEFAULT_LOCALE

    def to_money(self, amount: int | None) -> Money:
        return Money(amount=amount or 0, currency=self.currency)

    def format_amount(self, amount: int | None) -> str:
        """Format a whole-unit amount, e.g. ``PKR 7,000``."""
        money = self.to_money(amount)
        return format_currency(
            money.amount,
            money.currency.code,
            format=AMOUNT_PATTERN,
            locale=self.locale,
            currency_digits=False,
        )

    def localize(self, value: datetime) -> datetime:
        """Move an aware datetime onto the receipt clock; naive values are already local."""
        if value.tzinfo is None:
            return value
        return value.astimezone(self.tzinfo)

    def format_date(self, value: date | datetime) -> str:
        """Short day/month/year, e.g. ``13 Apr 2025``."""
        if isinstance(value, datetime):
            value = self.localize(value)
        return format_date(value, format=DATE_PATTERN, locale=self.locale)

    def format_time(self, value: datetime) -> str:
        """Hour and minute on the receipt clock."""
        value = self.localize(value)
        return format_time(value, format=TIME_PATTERN, tzinfo=value.tzinfo, locale=self.locale)


__all__ = ["ReceiptFormatter", "DEFAULT_LOCALE"]
