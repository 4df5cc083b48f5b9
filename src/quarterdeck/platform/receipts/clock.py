"""
Receipt clock.

Receipt numbers, fallback receipt dates and the "Generated on" footer all
read the same wall clock: the configured ``RECEIPTS__TIMEZONE``, or the
server's local zone when none is set.
"""

from datetime import datetime, tzinfo

from babel.dates import get_timezone

from quarterdeck.platform.settings import get_settings


def resolve_timezone(name: str | None = None) -> tzinfo:
    """Zone for ``name``, the configured zone, or the server's local zone."""
    name = name or get_settings().receipts.timezone
    if name:
        return get_timezone(name)
    return datetime.now().astimezone().tzinfo  # type: ignore[return-value]


def local_now(tz: tzinfo | None = None) -> datetime:
    """Timezone-aware current time on the receipt clock."""
    return datetime.now(tz or resolve_timezone())


__all__ = ["resolve_timezone", "local_now"]
