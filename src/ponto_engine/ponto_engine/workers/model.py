from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, WorkerStatus


@dataclass(frozen=True)
class Worker:
    """Servidor de campo cujo ponto semanal é lançado."""

    worker_id: str
    name: str
    matricula: str = ""
    supervisor_area_id: Optional[str] = None
    supervisor_geral_id: Optional[str] = None
    status: WorkerStatus = WorkerStatus.ACTIVE


@dataclass(frozen=True)
class Supervisor:
    """Supervisor Geral ou de Área (linha da tabela users)."""

    supervisor_id: str
    name: str
    role: Role
    supervisor_geral_id: Optional[str] = None
