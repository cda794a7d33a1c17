from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from ..core.constants import SATURDAY_DAY, WEEKDAY_DAYS
from ..core.enums import DayStatus
from ..core.exceptions import InvalidDayStatus
from .model import DailyEntry, DayInput


def expected_days(saturday_active: bool) -> set[int]:
    days = set(WEEKDAY_DAYS)
    if saturday_active:
        days.add(SATURDAY_DAY)
    return days


def parse_day_status(value: Any) -> DayStatus:
    """Accept the stored label ("Férias") or the enum name ("VACATION")."""
    if isinstance(value, DayStatus):
        return value
    raw = str(value or "").strip()
    try:
        return DayStatus(raw)
    except ValueError:
        pass
    try:
        return DayStatus[raw.upper()]
    except KeyError:
        raise InvalidDayStatus(f"Situação do dia inválida: {value!r}")


def _production(value: Any, day: int) -> float:
    if value is None or value == "":
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidDayStatus(f"Produção inválida no dia {day}: {value!r}")
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        raise InvalidDayStatus(f"Produção deve ser um número não negativo (dia {day})")
    return amount


def _worked_units(value: Any, status: DayStatus, day: int) -> int:
    if status != DayStatus.NORMAL:
        if value not in (None, 0, "0", False):
            raise InvalidDayStatus(f"Dia {day} com situação '{status.value}' não conta como trabalhado")
        return 0
    if value is None:
        return 1
    if value in (0, 1, "0", "1", True, False):
        return int(value)
    raise InvalidDayStatus(f"Dias trabalhados deve ser 0 ou 1 (dia {day})")


def day_input_from_mapping(raw: Mapping[str, Any]) -> DayInput:
    """Build a DayInput from a JSON object (keys as in the daily_entries table)."""
    try:
        day = int(raw.get("day_of_week"))
    except (TypeError, ValueError):
        raise InvalidDayStatus(f"day_of_week inválido: {raw.get('day_of_week')!r}")
    worked = raw.get("worked_units", raw.get("worked_days"))
    return DayInput(
        day_of_week=day,
        status=parse_day_status(raw.get("status") or DayStatus.NORMAL),
        production=raw.get("production"),
        worked_units=worked,
    )


def normalize_days(days: Iterable[DayInput], *, saturday_active: bool) -> list[DailyEntry]:
    """Validate a full week of day inputs and turn them into entries ordered by day."""
    by_day: dict[int, DayInput] = {}
    for d in days:
        if d.day_of_week in by_day:
            raise InvalidDayStatus(f"Dia {d.day_of_week} informado mais de uma vez")
        by_day[d.day_of_week] = d

    expected = expected_days(saturday_active)
    if set(by_day) != expected:
        missing = sorted(expected - set(by_day))
        extra = sorted(set(by_day) - expected)
        raise InvalidDayStatus(f"Conjunto de dias inválido (faltando={missing}, sobrando={extra})")

    entries: list[DailyEntry] = []
    for day in sorted(by_day):
        d = by_day[day]
        status = parse_day_status(d.status)
        entries.append(
            DailyEntry(
                day_of_week=day,
                worked_units=_worked_units(d.worked_units, status, day),
                production=_production(d.production, day),
                status=status,
            )
        )
    return entries


def record_totals(entries: Iterable[DailyEntry]) -> tuple[int, float]:
    worked = 0
    production = 0.0
    for e in entries:
        worked += int(e.worked_units)
        production += float(e.production)
    return worked, production


def day_status_counts(entries: Iterable[DailyEntry]) -> dict[DayStatus, int]:
    counts: dict[DayStatus, int] = {}
    for e in entries:
        counts[e.status] = counts.get(e.status, 0) + 1
    return counts
