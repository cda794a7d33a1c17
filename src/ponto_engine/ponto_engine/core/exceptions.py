from __future__ import annotations

from typing import Iterable, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthorizationError(DomainError):
    """Raised when a role lacks permission for an action."""

    code = "authorization_error"


class InvalidDayStatus(ValidationError):
    """Unknown day status, bad day values, or a day set that does not match the record."""

    code = "invalid_day_status"


class RecordLocked(DomainError):
    """Write attempted against a submitted weekly record."""

    code = "record_locked"

    def __init__(self, worker_id: str, year: int, week: int):
        super().__init__(f"Registro {worker_id} {week:02d}/{year} já foi enviado e não pode ser editado")
        self.worker_id = worker_id
        self.year = year
        self.week = week


class IncompleteCoverage(DomainError):
    """Submit refused because some targeted workers have no record for a period."""

    code = "incomplete_coverage"

    def __init__(self, missing: Iterable[tuple[str, int]]):
        self.missing: Sequence[tuple[str, int]] = tuple(sorted(set(missing)))
        self.missing_worker_ids: Sequence[str] = tuple(sorted({worker_id for worker_id, _ in self.missing}))
        super().__init__(
            f"Preencha todos os registros antes de enviar ({len(self.missing_worker_ids)} servidor(es) pendente(s))"
        )


class KeyConflict(DomainError):
    """Concurrent creation of the same (worker, year, week) record."""

    code = "key_conflict"

    def __init__(self, worker_id: str, year: int, week: int):
        super().__init__(f"Registro {worker_id} {week:02d}/{year} foi criado por outra requisição")
        self.worker_id = worker_id
        self.year = year
        self.week = week
