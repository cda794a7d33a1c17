from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from ponto_engine.core.enums import DayStatus, Role
from ponto_engine.records.memory_record_repository import InMemoryRecordRepository
from ponto_engine.records.model import DayInput
from ponto_engine.records.service import RecordService
from ponto_engine.workers.memory_worker_repository import InMemoryWorkerRepository
from ponto_engine.workers.model import Supervisor, Worker


class TickingClock:
    """Deterministic clock: every call advances one minute."""

    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        self._now += timedelta(minutes=1)
        return self._now


def make_week(*, saturday: bool = False, production: float = 10, **overrides) -> list[DayInput]:
    """Full week of Normal days; ``d3=DayStatus.HOLIDAY`` style overrides per day."""
    days = [1, 2, 3, 4, 5] + ([6] if saturday else [])
    out = []
    for day in days:
        status = overrides.get(f"d{day}", DayStatus.NORMAL)
        out.append(
            DayInput(
                day_of_week=day,
                status=status,
                production=production if status == DayStatus.NORMAL else 0,
            )
        )
    return out


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 1, 20, 8, 0))


@pytest.fixture
def records_repo(clock):
    return InMemoryRecordRepository(clock=clock)


@pytest.fixture
def record_service(records_repo):
    return RecordService(records_repo)


@pytest.fixture
def week():
    return make_week


@pytest.fixture
def workers_repo():
    """Geral G (areas A1 with 2 workers, A2 with 3) plus loose workers."""
    return InMemoryWorkerRepository(
        workers=[
            Worker(worker_id="w1", name="Ana", supervisor_area_id="a1", supervisor_geral_id="g1"),
            Worker(worker_id="w2", name="Bruno", supervisor_area_id="a1", supervisor_geral_id="g1"),
            Worker(worker_id="w3", name="Carla", supervisor_area_id="a2", supervisor_geral_id="g1"),
            Worker(worker_id="w4", name="Diego", supervisor_area_id="a2", supervisor_geral_id="g1"),
            Worker(worker_id="w5", name="Elisa", supervisor_area_id="a2", supervisor_geral_id="g1"),
            Worker(worker_id="w6", name="Fábio", supervisor_geral_id="g1"),
            Worker(worker_id="w7", name="Gabi"),
        ],
        supervisors=[
            Supervisor(supervisor_id="g1", name="Geral Centro", role=Role.SUPERVISOR_GERAL),
            Supervisor(supervisor_id="a1", name="Área Norte", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g1"),
            Supervisor(supervisor_id="a2", name="Área Sul", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g1"),
        ],
    )
