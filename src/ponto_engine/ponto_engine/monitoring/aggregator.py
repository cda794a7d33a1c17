from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from ..core.enums import CompletionStatus, RecordStatus
from ..core.exceptions import ValidationError
from ..hierarchy.model import AreaNode, GeralNode, HierarchyTree
from ..records.model import RecordSummary
from ..workers.model import Worker
from .model import AreaStats, CompletionStats, GeralStats, RollupResult, WorkerCoverage

FILTER_MODES = ("all", "pending", "complete")


class RollupAggregator:
    """Fold per-worker submission state bottom-up: area -> geral -> global.

    A worker counts as submitted only when every selected week has a
    submitted record. Totals (worked days, production) include drafts.
    """

    def rollup(
        self,
        tree: HierarchyTree,
        year: int,
        weeks: Sequence[int],
        summaries: Iterable[RecordSummary],
    ) -> RollupResult:
        week_set = sorted({int(w) for w in weeks})
        if not week_set:
            raise ValidationError("Selecione ao menos uma semana")

        by_worker: dict[str, list[RecordSummary]] = defaultdict(list)
        for s in summaries:
            if s.year == int(year) and s.week in week_set:
                by_worker[s.worker_id].append(s)

        gerais = tuple(self._geral(g, week_set, by_worker) for g in tree.gerais)
        summary = CompletionStats(
            total=sum(g.total for g in gerais),
            submitted_count=sum(g.submitted_count for g in gerais),
            worked_days=sum(g.worked_days for g in gerais),
            production=sum(g.production for g in gerais),
        )
        return RollupResult(year=int(year), weeks=tuple(week_set), gerais=gerais, summary=summary)

    @staticmethod
    def _coverage(worker: Worker, weeks: Sequence[int], records: Sequence[RecordSummary]) -> WorkerCoverage:
        submitted = {r.week: r for r in records if r.status == RecordStatus.SUBMITTED}
        covered = all(w in submitted for w in weeks)
        stamps = [r.updated_at for r in submitted.values() if r.updated_at is not None]
        return WorkerCoverage(
            worker_id=worker.worker_id,
            name=worker.name,
            matricula=worker.matricula,
            submitted=covered,
            submitted_weeks=tuple(sorted(submitted)),
            worked_days=sum(r.worked_days for r in records),
            production=sum(r.production for r in records),
            submitted_at=max(stamps) if covered and stamps else None,
        )

    def _area(self, area: AreaNode, weeks, by_worker) -> AreaStats:
        workers = tuple(self._coverage(w, weeks, by_worker.get(w.worker_id, ())) for w in area.workers)
        return AreaStats(
            total=len(workers),
            submitted_count=sum(1 for w in workers if w.submitted),
            worked_days=sum(w.worked_days for w in workers),
            production=sum(w.production for w in workers),
            area_id=area.area_id,
            name=area.name,
            workers=workers,
            synthetic=area.synthetic,
        )

    def _geral(self, geral: GeralNode, weeks, by_worker) -> GeralStats:
        areas = tuple(self._area(a, weeks, by_worker) for a in geral.areas)
        return GeralStats(
            total=sum(a.total for a in areas),
            submitted_count=sum(a.submitted_count for a in areas),
            worked_days=sum(a.worked_days for a in areas),
            production=sum(a.production for a in areas),
            geral_id=geral.geral_id,
            name=geral.name,
            areas=areas,
            synthetic=geral.synthetic,
        )


def filter_rollup(result: RollupResult, mode: str = "all") -> RollupResult:
    """Keep the geral nodes shown by the dashboard filter; the summary is unchanged."""
    mode = (mode or "all").lower()
    if mode not in FILTER_MODES:
        raise ValidationError(f"Filtro inválido: {mode!r}")
    if mode == "all":
        return result
    if mode == "complete":
        kept = tuple(g for g in result.gerais if g.status == CompletionStatus.COMPLETE)
    else:
        kept = tuple(g for g in result.gerais if g.status != CompletionStatus.COMPLETE)
    return RollupResult(year=result.year, weeks=result.weeks, gerais=kept, summary=result.summary)
