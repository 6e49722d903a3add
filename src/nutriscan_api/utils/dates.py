"""Date and time utility functions."""

from datetime import datetime, timezone

UTC_TZ = timezone.utc


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC_TZ)


def current_year() -> int:
    """Calendar year used for age calculations."""
    return utc_now().year
