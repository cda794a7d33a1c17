from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.validators import require_week_list
from ..core.enums import Role
from ..hierarchy.model import HierarchyTree
from ..hierarchy.service import build_hierarchy, referenced_supervisor_ids, scope_workers
from ..periods.epi_calendar import validate_period
from ..records.repository import WeeklyRecordRepository
from ..workers.repository import WorkerRepository
from .aggregator import RollupAggregator, filter_rollup
from .model import AreaStats, CompletionStats, GeralStats, RollupResult, WorkerCoverage

logger = logging.getLogger(__name__)


class MonitoringService:
    """Use case: submission monitoring dashboard for a year and a set of weeks."""

    def __init__(
        self,
        workers: WorkerRepository,
        records: WeeklyRecordRepository,
        *,
        aggregator: Optional[RollupAggregator] = None,
    ):
        self._workers = workers
        self._records = records
        self._aggregator = aggregator or RollupAggregator()

    def get_tree(self, role: Role | str, scope_id: Optional[str]) -> HierarchyTree:
        scoped = scope_workers(role, scope_id, self._workers.list_workers())
        area_ids, geral_ids = referenced_supervisor_ids(scoped)

        areas = [s for s in self._workers.get_supervisors(area_ids) if s.supervisor_id in area_ids]
        geral_ids |= {a.supervisor_geral_id for a in areas if a.supervisor_geral_id}
        gerais = [s for s in self._workers.get_supervisors(geral_ids) if s.supervisor_id in geral_ids]
        return build_hierarchy(scoped, areas, gerais)

    def get_rollup(
        self,
        role: Role | str,
        scope_id: Optional[str],
        year: int,
        weeks: Iterable[int],
        *,
        mode: str = "all",
    ) -> RollupResult:
        week_list = [validate_period(year, w).week for w in require_week_list(weeks)]
        tree = self.get_tree(role, scope_id)
        summaries = self._records.list_summaries(worker_ids=tree.worker_ids(), year=int(year), weeks=week_list)
        result = self._aggregator.rollup(tree, int(year), week_list, summaries)
        logger.debug(
            "rollup %s/%s role=%s: %s/%s submitted",
            week_list,
            year,
            role,
            result.summary.submitted_count,
            result.summary.total,
        )
        return filter_rollup(result, mode)

    @staticmethod
    def _stats_ui(stats: CompletionStats) -> dict:
        return {
            "total": stats.total,
            "submitted_count": stats.submitted_count,
            "pending_count": stats.pending_count,
            "completion_rate": round(stats.completion_rate, 4),
            "status": stats.status.value,
            "worked_days": stats.worked_days,
            "production": stats.production,
        }

    @staticmethod
    def _worker_ui(w: WorkerCoverage) -> dict:
        return {
            "id": w.worker_id,
            "name": w.name,
            "matricula": w.matricula,
            "submitted": w.submitted,
            "submitted_weeks": list(w.submitted_weeks),
            "submitted_at": w.submitted_at.isoformat() if w.submitted_at else None,
            "worked_days": w.worked_days,
            "production": w.production,
        }

    def _area_ui(self, a: AreaStats) -> dict:
        return {
            "id": a.area_id,
            "name": a.name,
            "synthetic": a.synthetic,
            **self._stats_ui(a),
            "workers": [self._worker_ui(w) for w in a.workers],
        }

    def _geral_ui(self, g: GeralStats) -> dict:
        return {
            "id": g.geral_id,
            "name": g.name,
            "synthetic": g.synthetic,
            **self._stats_ui(g),
            "areas": [self._area_ui(a) for a in g.areas],
        }

    def to_ui(self, result: RollupResult) -> dict:
        return {
            "year": result.year,
            "weeks": list(result.weeks),
            "summary": self._stats_ui(result.summary),
            "gerais": [self._geral_ui(g) for g in result.gerais],
        }
