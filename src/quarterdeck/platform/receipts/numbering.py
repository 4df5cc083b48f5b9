"""
Receipt number generation.

Numbers look like ``QD-BK-20250413-7K2XQ``: a prefix, the generation date
and five random base36 characters. The random suffix comes from a
non-cryptographic generator and nothing checks it for collisions, so two
receipts generated on the same day can share a number.
"""

import random
import string
from collections.abc import Callable
from datetime import date
from typing import Protocol

from .clock import local_now

BASE36_ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 5

DEFAULT_PREFIX = "QD"
BOOKING_SUFFIX = "BK"
EVENT_SUFFIX = "EV"
MEMBERSHIP_SUFFIX = "MB"


def _receipt_today() -> date:
    return local_now().date()


class ReceiptNumberGenerator(Protocol):
    """Anything that can mint a receipt number for a prefix."""

    def generate(self, prefix: str) -> str:
        """Return a new receipt number starting with ``prefix``."""
        ...


class RandomReceiptNumberGenerator:
    """Date-stamped numbers with a random base36 suffix."""

    def __init__(
        self,
        rng: random.Random | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._today = today or _receipt_today

    def generate(self, prefix: str = DEFAULT_PREFIX) -> str:
        stamp = self._today().strftime("%Y%m%d")
        suffix = "".join(self._rng.choices(BASE36_ALPHABET, k=SUFFIX_LENGTH))
        return f"{prefix}-{stamp}-{suffix}"


def kind_prefix(base: str, suffix: str) -> str:
    """Build a kind-specific prefix such as ``QD-BK``."""
    return f"{base}-{suffix}"


# Default generator instance
default_number_generator = RandomReceiptNumberGenerator()


def generate_receipt_number(prefix: str = DEFAULT_PREFIX) -> str:
    """Generate a receipt number with the default generator."""
    return default_number_generator.generate(prefix)


__all__ = [
    "BASE36_ALPHABET",
    "ReceiptNumberGenerator",
    "RandomReceiptNumberGenerator",
    "default_number_generator",
    "generate_receipt_number",
    "kind_prefix",
]
