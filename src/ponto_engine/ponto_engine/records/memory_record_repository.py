from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import RecordStatus
from ..core.exceptions import RecordLocked
from .day_rules import record_totals
from .model import DailyEntry, RecordSummary, WeeklyRecord
from .repository import WeeklyRecordRepository


class InMemoryRecordRepository(WeeklyRecordRepository):
    """Process-local store used by the ``memory`` backend and the test suite.

    All mutations run under one lock, so the (worker, year, week) uniqueness and
    the all-or-nothing submit hold for concurrent callers.
    """

    def __init__(self, *, clock: Callable = now_local):
        self._lock = threading.RLock()
        self._records: dict[tuple[str, int, int], WeeklyRecord] = {}
        self._next_id = 1
        self._next_entry_id = 1
        self._clock = clock

    def get(self, *, worker_id: str, year: int, week: int) -> Optional[WeeklyRecord]:
        with self._lock:
            return self._records.get((str(worker_id), int(year), int(week)))

    def save_draft(
        self,
        *,
        worker_id: str,
        year: int,
        week: int,
        saturday_active: bool,
        notes: str,
        entries: Sequence[DailyEntry],
    ) -> WeeklyRecord:
        key = (str(worker_id), int(year), int(week))
        with self._lock:
            now = self._clock()
            current = self._records.get(key)
            if current and current.is_locked:
                raise RecordLocked(*key)

            previous_ids = {e.day_of_week: e.entry_id for e in current.entries} if current else {}
            stored_entries = []
            for e in sorted(entries, key=lambda x: x.day_of_week):
                entry_id = previous_ids.get(e.day_of_week)
                if entry_id is None:
                    entry_id = self._next_entry_id
                    self._next_entry_id += 1
                stored_entries.append(replace(e, entry_id=entry_id, updated_at=now))

            if current is None:
                record = WeeklyRecord(
                    record_id=self._next_id,
                    worker_id=key[0],
                    year=key[1],
                    week=key[2],
                    saturday_active=bool(saturday_active),
                    status=RecordStatus.DRAFT,
                    notes=notes,
                    entries=tuple(stored_entries),
                    created_at=now,
                    updated_at=now,
                )
                self._next_id += 1
            else:
                record = replace(
                    current,
                    saturday_active=bool(saturday_active),
                    notes=notes,
                    entries=tuple(stored_entries),
                    updated_at=now,
                )
            self._records[key] = record
            return record

    def submit(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> list[tuple[str, int]]:
        with self._lock:
            missing = [
                (str(w), int(week))
                for week in weeks
                for w in worker_ids
                if (str(w), int(year), int(week)) not in self._records
            ]
            if missing:
                return missing

            now = self._clock()
            for week in weeks:
                for w in worker_ids:
                    key = (str(w), int(year), int(week))
                    rec = self._records[key]
                    if not rec.is_locked:
                        self._records[key] = replace(rec, status=RecordStatus.SUBMITTED, updated_at=now)
            return []

    def list_summaries(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> Sequence[RecordSummary]:
        wanted_workers = {str(w) for w in worker_ids}
        wanted_weeks = {int(w) for w in weeks}
        with self._lock:
            records = [
                r
                for (w, y, wk), r in self._records.items()
                if w in wanted_workers and y == int(year) and wk in wanted_weeks
            ]
        out = []
        for r in records:
            worked, production = record_totals(r.entries)
            out.append(
                RecordSummary(
                    worker_id=r.worker_id,
                    year=r.year,
                    week=r.week,
                    status=r.status,
                    worked_days=worked,
                    production=production,
                    updated_at=r.updated_at,
                )
            )
        return out

    def delete(self, *, worker_id: str, year: int, week: int) -> bool:
        with self._lock:
            return self._records.pop((str(worker_id), int(year), int(week)), None) is not None
