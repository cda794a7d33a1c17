from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class EpiWeek:
    """Semana epidemiológica: (ano epidemiológico, número da semana 1..53)."""

    year: int
    week: int

    def label(self) -> str:
        return f"SE {self.week:02d}/{self.year}"


@dataclass(frozen=True)
class PeriodRange:
    """Janela domingo–sábado de uma semana epidemiológica."""

    year: int
    week: int
    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end
