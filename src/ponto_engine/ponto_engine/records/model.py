from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import DayStatus, RecordStatus


@dataclass(frozen=True)
class DayInput:
    """Dados de um dia enviados pelo formulário de ponto (antes da gravação)."""

    day_of_week: int
    status: DayStatus = DayStatus.NORMAL
    production: float = 0.0
    worked_units: Optional[int] = None


@dataclass(frozen=True)
class DailyEntry:
    """Entidade: lançamento diário de um registro semanal."""

    day_of_week: int
    worked_units: int
    production: float
    status: DayStatus
    entry_id: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class WeeklyRecord:
    """Entidade: registro semanal de um servidor (chave: servidor, ano, semana)."""

    record_id: int
    worker_id: str
    year: int
    week: int
    saturday_active: bool
    status: RecordStatus
    notes: str = ""
    entries: tuple[DailyEntry, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_locked(self) -> bool:
        return self.status == RecordStatus.SUBMITTED

    def day_set(self) -> set[int]:
        return {e.day_of_week for e in self.entries}


@dataclass(frozen=True)
class RecordSummary:
    """Read-model para o monitoramento: status e totais de um registro."""

    worker_id: str
    year: int
    week: int
    status: RecordStatus
    worked_days: int
    production: float
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class WeekStatus:
    year: int
    week: int
    total_workers: int
    records_count: int
    submitted_count: int

    @property
    def is_complete(self) -> bool:
        return self.total_workers > 0 and self.records_count >= self.total_workers

    @property
    def is_submitted(self) -> bool:
        return self.total_workers > 0 and self.submitted_count >= self.total_workers
