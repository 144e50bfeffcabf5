from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_long_date(value: date | datetime | None) -> str:
    """Format as 'January 5, 2024' without platform-specific strftime flags."""
    if value is None:
        return "-"
    return f"{value:%B} {value.day}, {value.year}"
