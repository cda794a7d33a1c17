from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import Role, WorkerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .model import Supervisor, Worker
from .repository import WorkerRepository


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_workers(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, matricula, status, supervisor_area_id, supervisor_geral_id
                FROM servers
                ORDER BY name
                """
            )
            return [
                Worker(
                    worker_id=str(r["id"]),
                    name=r["name"],
                    matricula=r.get("matricula") or "",
                    supervisor_area_id=r.get("supervisor_area_id"),
                    supervisor_geral_id=r.get("supervisor_geral_id"),
                    status=WorkerStatus(r.get("status") or WorkerStatus.ACTIVE.value),
                )
                for r in fetchall(cur)
            ]

    def get_supervisors(self, supervisor_ids: Iterable[str]) -> Sequence[Supervisor]:
        ids = sorted({str(i) for i in supervisor_ids if i})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, name, role, supervisor_geral_id FROM users WHERE id IN ({in_placeholders(ids)})",
                tuple(ids),
            )
            return [
                Supervisor(
                    supervisor_id=str(r["id"]),
                    name=r["name"],
                    role=Role(r["role"]),
                    supervisor_geral_id=r.get("supervisor_geral_id"),
                )
                for r in fetchall(cur)
            ]
