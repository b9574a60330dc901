from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def hours_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 3600


def format_admission_date(value) -> str:
    """Format as DD/MM/YY h:MM AM/PM (e.g. 05/03/25 9:07 AM)."""

    if value is None:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())

    hours12 = value.hour % 12 or 12
    ampm = "PM" if value.hour >= 12 else "AM"
    return f"{value:%d/%m/%y} {hours12}:{value.minute:02d} {ampm}"

