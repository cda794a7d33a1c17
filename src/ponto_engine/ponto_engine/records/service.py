from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import require_id_list, require_non_empty, require_week_list
from ..core.constants import DEFAULT_KEY_CONFLICT_RETRIES, NOTES_MAX_LENGTH
from ..core.enums import RecordStatus, Role
from ..core.exceptions import AuthorizationError, IncompleteCoverage, KeyConflict, ValidationError
from ..periods.epi_calendar import validate_period
from .day_rules import day_status_counts, normalize_days, record_totals
from .model import DayInput, WeeklyRecord, WeekStatus
from .repository import WeeklyRecordRepository

logger = logging.getLogger(__name__)


class RecordService:
    """Use case: weekly record lifecycle (draft -> submitted, locked after submit)."""

    def __init__(self, records: WeeklyRecordRepository, *, key_conflict_retries: int = DEFAULT_KEY_CONFLICT_RETRIES):
        self._records = records
        self._retries = max(0, int(key_conflict_retries))

    def get_record(self, worker_id: str, year: int, week: int) -> Optional[WeeklyRecord]:
        period = validate_period(year, week)
        return self._records.get(worker_id=require_non_empty(worker_id, "servidor"), year=period.year, week=period.week)

    def write_record(
        self,
        worker_id: str,
        year: int,
        week: int,
        days: Iterable[DayInput],
        *,
        notes: str = "",
        saturday_active: bool = False,
    ) -> WeeklyRecord:
        worker_id = require_non_empty(worker_id, "servidor")
        period = validate_period(year, week)
        entries = normalize_days(days, saturday_active=saturday_active)
        notes = (notes or "").strip()[:NOTES_MAX_LENGTH]

        attempt = 0
        while True:
            try:
                record = self._records.save_draft(
                    worker_id=worker_id,
                    year=period.year,
                    week=period.week,
                    saturday_active=bool(saturday_active),
                    notes=notes,
                    entries=entries,
                )
                break
            except KeyConflict:
                if attempt >= self._retries:
                    logger.warning("key conflict persisted for %s %s", worker_id, period.label())
                    raise
                attempt += 1
                logger.info("key conflict on %s %s, retrying as update", worker_id, period.label())

        logger.info("record %s saved for %s %s", record.record_id, worker_id, period.label())
        return record

    def submit_period(self, worker_ids: Sequence[str], year: int, weeks: Iterable[int]) -> None:
        """Lock every targeted record for the given weeks, or none of them."""
        ids = require_id_list(worker_ids, "servidores")
        week_list = [validate_period(year, w).week for w in require_week_list(weeks)]

        missing = self._records.submit(worker_ids=ids, year=int(year), weeks=week_list)
        if missing:
            logger.info("submit refused for %s/%s: %s record(s) missing", week_list, year, len(missing))
            raise IncompleteCoverage(missing)
        logger.info("submitted weeks %s/%s for %s worker(s)", week_list, year, len(ids))

    def delete_record(self, worker_id: str, year: int, week: int, *, role: Role | str) -> bool:
        """Administrative removal of a week, submitted or not. Returns False when nothing was stored."""
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Papel desconhecido: {role!r}")
        if role not in (Role.SUPER_ADMIN, Role.GESTOR):
            raise AuthorizationError("Apenas administradores excluem registros semanais")

        worker_id = require_non_empty(worker_id, "servidor")
        period = validate_period(year, week)
        deleted = self._records.delete(worker_id=worker_id, year=period.year, week=period.week)
        if deleted:
            logger.info("record of %s %s deleted by %s", worker_id, period.label(), role.value)
        return deleted

    def submit(self, worker_ids: Sequence[str], year: int, week: int) -> None:
        self.submit_period(worker_ids, year, [week])

    def week_status(self, worker_ids: Sequence[str], year: int, week: int) -> WeekStatus:
        period = validate_period(year, week)
        ids = [str(w) for w in worker_ids]
        summaries = self._records.list_summaries(worker_ids=ids, year=period.year, weeks=[period.week]) if ids else []
        return WeekStatus(
            year=period.year,
            week=period.week,
            total_workers=len(set(ids)),
            records_count=len(summaries),
            submitted_count=sum(1 for s in summaries if s.status == RecordStatus.SUBMITTED),
        )

    @staticmethod
    def to_ui(record: WeeklyRecord) -> dict:
        worked, production = record_totals(record.entries)
        return {
            "id": record.record_id,
            "worker_id": record.worker_id,
            "year": record.year,
            "week": record.week,
            "saturday_active": record.saturday_active,
            "status": record.status.value,
            "locked": record.is_locked,
            "notes": record.notes,
            "days": [
                {
                    "day_of_week": e.day_of_week,
                    "worked_units": e.worked_units,
                    "production": e.production,
                    "status": e.status.value,
                }
                for e in record.entries
            ],
            "totals": {
                "worked_days": worked,
                "production": production,
                "by_status": {k.value: v for k, v in day_status_counts(record.entries).items()},
            },
            "updated_at": record.updated_at.isoformat() if record.updated_at else None,
        }
