"""Epidemiological-week calendar.

Weeks run Sunday to Saturday. Week 1 of a year is the first week holding at
least 4 days of January, so the Saturday that closes it falls on Jan 4..10.
Days before that Saturday's week belong to the last week of the previous year.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import as_local_date, today_local
from ..core.constants import SATURDAY_DAY, WEEKDAY_DAYS
from ..core.exceptions import ValidationError
from .model import EpiWeek, PeriodRange

MIN_YEAR = 1900
MAX_YEAR = 9998

_ONE_WEEK = timedelta(days=7)


def sunday_weekday(d: date) -> int:
    """Weekday with 0=Sunday ... 6=Saturday."""
    return (d.weekday() + 1) % 7


def saturday_of(d: date) -> date:
    """Saturday closing the Sunday-Saturday window that contains ``d``."""
    return d + timedelta(days=6 - sunday_weekday(d))


def period_one_saturday(year: int) -> date:
    jan1 = date(year, 1, 1)
    first_saturday = saturday_of(jan1)
    # Jan 1-3: that week has 4+ days in December and closes last year.
    if first_saturday.day < 4:
        first_saturday += _ONE_WEEK
    return first_saturday


def weeks_in_year(year: int) -> int:
    return (period_one_saturday(year + 1) - period_one_saturday(year)).days // 7


def supported_window() -> tuple[date, date]:
    """First and last calendar day covered by periods of MIN_YEAR..MAX_YEAR."""
    first = period_one_saturday(MIN_YEAR) - timedelta(days=6)
    last = period_one_saturday(MAX_YEAR + 1) - _ONE_WEEK
    return first, last


def period_of(value: date | datetime) -> EpiWeek:
    day = as_local_date(value)
    first, last = supported_window()
    if not first <= day <= last:
        raise ValidationError(f"Data fora do intervalo suportado: {day.isoformat()}")
    saturday = saturday_of(day)
    year = saturday.year
    week_one = period_one_saturday(year)
    if saturday < week_one:
        year -= 1
        week_one = period_one_saturday(year)
    return EpiWeek(year=year, week=1 + (saturday - week_one).days // 7)


def validate_period(year: int, week: int) -> EpiWeek:
    year = int(year)
    week = int(week)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Ano fora do intervalo suportado: {year}")
    last = weeks_in_year(year)
    if not 1 <= week <= last:
        raise ValidationError(f"Semana {week} inválida para {year} (1..{last})")
    return EpiWeek(year=year, week=week)


def period_range(year: int, week: int) -> PeriodRange:
    period = validate_period(year, week)
    end = period_one_saturday(period.year) + _ONE_WEEK * (period.week - 1)
    return PeriodRange(year=period.year, week=period.week, start=end - timedelta(days=6), end=end)


def current_period(today: Optional[date] = None) -> EpiWeek:
    return period_of(today or today_local())


def iter_periods(year: int) -> list[EpiWeek]:
    validate_period(year, 1)
    return [EpiWeek(year=int(year), week=w) for w in range(1, weeks_in_year(int(year)) + 1)]


def period_days(year: int, week: int, *, saturday_active: bool) -> dict[int, date]:
    """Calendar date of each tracked day (1=Monday .. 6=Saturday)."""
    rng = period_range(year, week)
    days = list(WEEKDAY_DAYS) + ([SATURDAY_DAY] if saturday_active else [])
    return {day: rng.start + timedelta(days=day) for day in days}
