from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ..workers.model import Worker


@dataclass(frozen=True)
class AreaNode:
    area_id: str
    name: str
    geral_id: Optional[str]
    workers: tuple[Worker, ...]
    synthetic: bool = False


@dataclass(frozen=True)
class GeralNode:
    geral_id: str
    name: str
    areas: tuple[AreaNode, ...]
    synthetic: bool = False

    def iter_workers(self) -> Iterator[Worker]:
        for area in self.areas:
            yield from area.workers


@dataclass(frozen=True)
class HierarchyTree:
    """Supervisor Geral -> Supervisor de Área -> Servidor."""

    gerais: tuple[GeralNode, ...]

    def iter_workers(self) -> Iterator[Worker]:
        for geral in self.gerais:
            yield from geral.iter_workers()

    def worker_ids(self) -> list[str]:
        return [w.worker_id for w in self.iter_workers()]
