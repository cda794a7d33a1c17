from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import Supervisor, Worker


class WorkerRepository(Protocol):
    """Read-only source of workers and supervisors.

    Row-level access rules live in the storage layer; this engine only reads.
    """

    def list_workers(self) -> Sequence[Worker]:
        raise NotImplementedError

    def get_supervisors(self, supervisor_ids: Iterable[str]) -> Sequence[Supervisor]:
        raise NotImplementedError
