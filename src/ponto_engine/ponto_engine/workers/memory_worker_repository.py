from __future__ import annotations

from typing import Iterable, Sequence

from .model import Supervisor, Worker
from .repository import WorkerRepository


class InMemoryWorkerRepository(WorkerRepository):
    """Fixed worker/supervisor rows for the ``memory`` backend and tests."""

    def __init__(self, workers: Iterable[Worker] = (), supervisors: Iterable[Supervisor] = ()):
        self._workers = {w.worker_id: w for w in workers}
        self._supervisors = {s.supervisor_id: s for s in supervisors}

    def add_worker(self, worker: Worker) -> None:
        self._workers[worker.worker_id] = worker

    def add_supervisor(self, supervisor: Supervisor) -> None:
        self._supervisors[supervisor.supervisor_id] = supervisor

    def list_workers(self) -> Sequence[Worker]:
        return sorted(self._workers.values(), key=lambda w: w.name)

    def get_supervisors(self, supervisor_ids: Iterable[str]) -> Sequence[Supervisor]:
        return [self._supervisors[i] for i in {str(x) for x in supervisor_ids if x} if i in self._supervisors]
