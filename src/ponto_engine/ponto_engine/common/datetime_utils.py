from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Data inválida (AAAA-MM-DD): {value!r}")


def as_local_date(value: date | datetime) -> date:
    """Truncate a datetime to its local calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()


def now_local() -> datetime:
    return datetime.now()
