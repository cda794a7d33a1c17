"""Exemplo: usar a camada de serviços sem passar pelo Flask."""

from datetime import date

from ponto_engine.container import build_container
from ponto_engine.core.enums import DayStatus, Role
from ponto_engine.records.model import DayInput
from ponto_engine.workers.memory_worker_repository import InMemoryWorkerRepository
from ponto_engine.workers.model import Supervisor, Worker


def main():
    workers = InMemoryWorkerRepository(
        workers=[
            Worker(worker_id="s1", name="Ana", matricula="001", supervisor_area_id="a1", supervisor_geral_id="g1"),
            Worker(worker_id="s2", name="Bruno", matricula="002", supervisor_area_id="a1", supervisor_geral_id="g1"),
        ],
        supervisors=[
            Supervisor(supervisor_id="g1", name="Geral Centro", role=Role.SUPERVISOR_GERAL),
            Supervisor(supervisor_id="a1", name="Área Norte", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g1"),
        ],
    )
    container = build_container(storage="memory", workers_repo=workers)

    period = container.period_service.get_period(date.today())
    print("Semana atual:", period.label())

    week = [DayInput(day_of_week=d, production=10) for d in range(1, 6)]
    week[2] = DayInput(day_of_week=3, status=DayStatus.HOLIDAY)
    container.record_service.write_record("s1", period.year, period.week, week)
    container.record_service.submit_period(["s1"], period.year, [period.week])

    rollup = container.monitoring_service.get_rollup(Role.GESTOR, None, period.year, [period.week])
    print(container.monitoring_service.to_ui(rollup)["summary"])


if __name__ == "__main__":
    main()
