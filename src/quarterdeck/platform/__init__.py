"""
Quarterdeck platform services.

Shared infrastructure for the Quarterdeck sports-complex application:
- Centralized configuration (pydantic-settings)
- Structured logging (structlog)
- Transaction receipts (assembly and PDF rendering)
"""

__version__ = "1.0.0"
__author__ = "Quarterdeck Team"


def get_version() -> str:
    """Get platform version."""
    return __version__


__all__ = ["__version__", "get_version"]
