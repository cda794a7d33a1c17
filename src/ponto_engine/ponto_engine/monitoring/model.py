from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CompletionStatus


def classify(submitted_count: int, total: int) -> CompletionStatus:
    if total > 0 and submitted_count >= total:
        return CompletionStatus.COMPLETE
    if submitted_count <= 0:
        return CompletionStatus.PENDING
    return CompletionStatus.PARTIAL


@dataclass(frozen=True)
class CompletionStats:
    """Contagens de envio e totais de produção de um nó da hierarquia."""

    total: int
    submitted_count: int
    worked_days: int
    production: float

    @property
    def pending_count(self) -> int:
        return self.total - self.submitted_count

    @property
    def completion_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.submitted_count / self.total

    @property
    def status(self) -> CompletionStatus:
        return classify(self.submitted_count, self.total)


@dataclass(frozen=True)
class WorkerCoverage:
    worker_id: str
    name: str
    matricula: str
    submitted: bool
    submitted_weeks: tuple[int, ...]
    worked_days: int
    production: float
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class AreaStats(CompletionStats):
    area_id: str
    name: str
    workers: tuple[WorkerCoverage, ...]
    synthetic: bool = False


@dataclass(frozen=True)
class GeralStats(CompletionStats):
    geral_id: str
    name: str
    areas: tuple[AreaStats, ...]
    synthetic: bool = False


@dataclass(frozen=True)
class RollupResult:
    year: int
    weeks: tuple[int, ...]
    gerais: tuple[GeralStats, ...]
    summary: CompletionStats

    def find_geral(self, geral_id: str) -> Optional[GeralStats]:
        for g in self.gerais:
            if g.geral_id == geral_id:
                return g
        return None
