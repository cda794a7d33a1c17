from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date, today_local
from . import epi_calendar
from .model import EpiWeek, PeriodRange


class PeriodService:
    """Use case: answer calendar questions for the period pickers."""

    def get_period(self, value: Optional[date | str] = None) -> EpiWeek:
        if value is None or value == "":
            return epi_calendar.period_of(today_local())
        if isinstance(value, str):
            value = parse_iso_date(value)
        return epi_calendar.period_of(value)

    def get_period_range(self, year: int, week: int) -> PeriodRange:
        return epi_calendar.period_range(year, week)

    def list_periods(self, year: int) -> list[PeriodRange]:
        return [epi_calendar.period_range(p.year, p.week) for p in epi_calendar.iter_periods(year)]

    @staticmethod
    def to_ui(rng: PeriodRange) -> dict:
        return {
            "year": rng.year,
            "week": rng.week,
            "label": EpiWeek(rng.year, rng.week).label(),
            "start": rng.start.strftime("%Y-%m-%d"),
            "end": rng.end.strftime("%Y-%m-%d"),
        }
