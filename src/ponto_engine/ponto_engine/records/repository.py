from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DailyEntry, RecordSummary, WeeklyRecord


class WeeklyRecordRepository(Protocol):
    """Interface de persistência dos registros semanais e lançamentos diários.

    Each mutating method is one transaction: the record row and its entries
    change together or not at all.
    """

    def get(self, *, worker_id: str, year: int, week: int) -> Optional[WeeklyRecord]:
        raise NotImplementedError

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
        """Create-if-absent then overwrite the record and its full entry set.

        Raises RecordLocked when the stored record is submitted and KeyConflict
        when another writer created the same key first.
        """

        raise NotImplementedError

    def submit(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> list[tuple[str, int]]:
        """Flip every targeted record to submitted.

        Returns the (worker_id, week) pairs without any record; when that list is
        non-empty nothing was changed.
        """

        raise NotImplementedError

    def list_summaries(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> Sequence[RecordSummary]:
        raise NotImplementedError

    def delete(self, *, worker_id: str, year: int, week: int) -> bool:
        """Remove the record and all its entries together; False when absent."""

        raise NotImplementedError
