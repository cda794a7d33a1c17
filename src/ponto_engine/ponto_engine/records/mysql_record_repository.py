from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import DayStatus, RecordStatus
from ..core.exceptions import KeyConflict, RecordLocked
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .model import DailyEntry, RecordSummary, WeeklyRecord
from .repository import WeeklyRecordRepository

_CREATE_RACE_ERRNOS = {errorcode.ER_DUP_ENTRY, errorcode.ER_LOCK_DEADLOCK}


class MySQLRecordRepository(WeeklyRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _load(cur, record_id: int) -> Optional[WeeklyRecord]:
        cur.execute(
            """
            SELECT id, server_id, year, week_number, saturday_active, status, notes, created_at, updated_at
            FROM weekly_records
            WHERE id=%s
            """,
            (int(record_id),),
        )
        r = fetchone(cur)
        if not r:
            return None

        cur.execute(
            """
            SELECT id, day_of_week, worked_days, production, status, updated_at
            FROM daily_entries
            WHERE weekly_record_id=%s
            ORDER BY day_of_week
            """,
            (int(record_id),),
        )
        entries = tuple(
            DailyEntry(
                day_of_week=int(e["day_of_week"]),
                worked_units=int(e.get("worked_days") or 0),
                production=float(e.get("production") or 0),
                status=DayStatus(e.get("status") or DayStatus.NORMAL.value),
                entry_id=int(e["id"]),
                updated_at=e.get("updated_at"),
            )
            for e in fetchall(cur)
        )
        return WeeklyRecord(
            record_id=int(r["id"]),
            worker_id=str(r["server_id"]),
            year=int(r["year"]),
            week=int(r["week_number"]),
            saturday_active=bool(r["saturday_active"]),
            status=RecordStatus(r["status"]),
            notes=r.get("notes") or "",
            entries=entries,
            created_at=r.get("created_at"),
            updated_at=r.get("updated_at"),
        )

    def get(self, *, worker_id: str, year: int, week: int) -> Optional[WeeklyRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM weekly_records WHERE server_id=%s AND year=%s AND week_number=%s",
                (str(worker_id), int(year), int(week)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._load(cur, int(r["id"]))

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, status
                FROM weekly_records
                WHERE server_id=%s AND year=%s AND week_number=%s
                FOR UPDATE
                """,
                key,
            )
            r = fetchone(cur)
            if r and r["status"] == RecordStatus.SUBMITTED.value:
                raise RecordLocked(*key)

            if r:
                record_id = int(r["id"])
                cur.execute(
                    """
                    UPDATE weekly_records
                    SET saturday_active=%s, notes=%s, updated_at=CURRENT_TIMESTAMP
                    WHERE id=%s
                    """,
                    (int(bool(saturday_active)), notes, record_id),
                )
            else:
                try:
                    cur.execute(
                        """
                        INSERT INTO weekly_records(server_id, year, week_number, saturday_active, status, notes)
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        (*key, int(bool(saturday_active)), RecordStatus.DRAFT.value, notes),
                    )
                except mysql.connector.Error as e:
                    if e.errno in _CREATE_RACE_ERRNOS:
                        raise KeyConflict(*key) from e
                    raise
                record_id = int(cur.lastrowid)

            for e in entries:
                cur.execute(
                    """
                    INSERT INTO daily_entries(weekly_record_id, day_of_week, worked_days, production, status)
                    VALUES(%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        worked_days=VALUES(worked_days),
                        production=VALUES(production),
                        status=VALUES(status),
                        updated_at=CURRENT_TIMESTAMP
                    """,
                    (record_id, int(e.day_of_week), int(e.worked_units), float(e.production), e.status.value),
                )

            days = [int(e.day_of_week) for e in entries]
            cur.execute(
                f"DELETE FROM daily_entries WHERE weekly_record_id=%s AND day_of_week NOT IN ({in_placeholders(days)})",
                (record_id, *days),
            )

            return self._load(cur, record_id)

    def submit(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> list[tuple[str, int]]:
        ids = [str(w) for w in worker_ids]
        week_list = [int(w) for w in weeks]
        if not ids or not week_list:
            return []

        where = (
            f"year=%s AND week_number IN ({in_placeholders(week_list)}) "
            f"AND server_id IN ({in_placeholders(ids)})"
        )
        params = (int(year), *week_list, *ids)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT server_id, week_number FROM weekly_records WHERE {where} FOR UPDATE", params)
            existing = {(str(r["server_id"]), int(r["week_number"])) for r in fetchall(cur)}
            missing = [(w, week) for week in week_list for w in ids if (w, week) not in existing]
            if missing:
                return missing

            cur.execute(
                f"""
                UPDATE weekly_records
                SET status=%s, updated_at=CURRENT_TIMESTAMP
                WHERE {where} AND status=%s
                """,
                (RecordStatus.SUBMITTED.value, *params, RecordStatus.DRAFT.value),
            )
            return []

    def list_summaries(self, *, worker_ids: Sequence[str], year: int, weeks: Sequence[int]) -> Sequence[RecordSummary]:
        ids = [str(w) for w in worker_ids]
        week_list = [int(w) for w in weeks]
        if not ids or not week_list:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    wr.server_id, wr.year, wr.week_number, wr.status, wr.updated_at,
                    COALESCE(SUM(de.worked_days), 0) AS worked_days,
                    COALESCE(SUM(de.production), 0) AS production
                FROM weekly_records wr
                LEFT JOIN daily_entries de ON de.weekly_record_id = wr.id
                WHERE wr.year=%s
                  AND wr.week_number IN ({in_placeholders(week_list)})
                  AND wr.server_id IN ({in_placeholders(ids)})
                GROUP BY wr.id, wr.server_id, wr.year, wr.week_number, wr.status, wr.updated_at
                """,
                (int(year), *week_list, *ids),
            )
            return [
                RecordSummary(
                    worker_id=str(r["server_id"]),
                    year=int(r["year"]),
                    week=int(r["week_number"]),
                    status=RecordStatus(r["status"]),
                    worked_days=int(r.get("worked_days") or 0),
                    production=float(r.get("production") or 0),
                    updated_at=r.get("updated_at"),
                )
                for r in fetchall(cur)
            ]

    def delete(self, *, worker_id: str, year: int, week: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM weekly_records WHERE server_id=%s AND year=%s AND week_number=%s FOR UPDATE",
                (str(worker_id), int(year), int(week)),
            )
            r = fetchone(cur)
            if not r:
                return False

            record_id = int(r["id"])
            cur.execute("DELETE FROM daily_entries WHERE weekly_record_id=%s", (record_id,))
            cur.execute("DELETE FROM weekly_records WHERE id=%s", (record_id,))
            return True
