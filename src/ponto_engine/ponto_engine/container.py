from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .monitoring.service import MonitoringService
from .periods.service import PeriodService
from .records.memory_record_repository import InMemoryRecordRepository
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import WeeklyRecordRepository
from .records.service import RecordService
from .workers.memory_worker_repository import InMemoryWorkerRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    workers_repo: WorkerRepository
    records_repo: WeeklyRecordRepository

    period_service: PeriodService
    record_service: RecordService
    monitoring_service: MonitoringService


def build_container(
    *,
    db_config: Optional[dict] = None,
    storage: str = "mysql",
    key_conflict_retries: int = 1,
    workers_repo: Optional[WorkerRepository] = None,
    records_repo: Optional[WeeklyRecordRepository] = None,
) -> Container:
    if storage not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage!r}")

    conn = None
    if storage == "mysql":
        if db_config is None:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        workers_repo = workers_repo or MySQLWorkerRepository(conn)
        records_repo = records_repo or MySQLRecordRepository(conn)
    else:
        workers_repo = workers_repo or InMemoryWorkerRepository()
        records_repo = records_repo or InMemoryRecordRepository()

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        records_repo=records_repo,
        period_service=PeriodService(),
        record_service=RecordService(records_repo, key_conflict_retries=key_conflict_retries),
        monitoring_service=MonitoringService(workers_repo, records_repo),
    )
