from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_form_date(value: Optional[str]) -> Optional[date]:
    """Parse an ``<input type="date">`` value; blank or malformed gives None."""
    if not value or not value.strip():
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def parse_form_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ``<input type="datetime-local">`` value (``YYYY-MM-DDTHH:MM[:SS]``)."""
    if not value or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip()).replace(tzinfo=None)
    except ValueError:
        return None


def format_form_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def format_form_datetime(value: Optional[datetime]) -> str:
    return value.isoformat(timespec="minutes") if value else ""


def to_db_date(value: date) -> str:
    return value.isoformat()


def to_db_datetime(value: datetime) -> str:
    return value.isoformat(sep=" ", timespec="seconds")


def from_db_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise TypeError(f"Unsupported DATE value type: {type(value)!r}")


def from_db_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"Unsupported DATETIME value type: {type(value)!r}")


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), datetime.min.time())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. This is the only clock the
    application reads; both validation and the historic-event filter use it.
    """
    return datetime.now().replace(microsecond=0)
