from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Papel do usuário logado; decide quais servidores ele enxerga."""

    SUPER_ADMIN = "super_admin"
    GESTOR = "gestor"
    SUPERVISOR_GERAL = "supervisor_geral"
    SUPERVISOR_AREA = "supervisor_area"
    SERVIDOR = "servidor"


class RecordStatus(str, Enum):
    """Ciclo de vida do registro semanal."""

    DRAFT = "draft"
    SUBMITTED = "submitted"


class DayStatus(str, Enum):
    """Situação de um dia no registro semanal (valores gravados no banco)."""

    NORMAL = "Normal"
    VACATION = "Férias"
    JUSTIFIED_ABSENCE = "Falta Justificada"
    UNJUSTIFIED_ABSENCE = "Falta Sem Justificativa"
    HOLIDAY = "Feriado"
    OPTIONAL_HOLIDAY = "Facultativo"
    BIRTHDAY_OFF = "Folga de Aniversário"


class WorkerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"
    ON_VACATION = "on_vacation"


class CompletionStatus(str, Enum):
    """Classificação de um nó do monitoramento de envios."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    PENDING = "pending"
