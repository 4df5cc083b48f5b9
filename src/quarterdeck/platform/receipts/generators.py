"""Receipt generator interface."""

from abc import ABC, abstractmethod

from .models import ReceiptData


class ReceiptGenerator(ABC):
    """Base class for receipt output formats."""

    media_type: str = "application/octet-stream"

    @abstractmethod
    async def generate(self, receipt: ReceiptData) -> bytes:
        """Render a receipt into a complete document."""


__all__ = ["ReceiptGenerator"]
