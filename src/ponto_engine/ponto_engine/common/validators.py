from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} inválido")
    return str(value).strip()


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} deve ser um número inteiro")


def require_id_list(values: Iterable, field_name: str) -> list[str]:
    """Deduplicate ids keeping the caller's order; rejects an empty list."""
    seen: dict[str, None] = {}
    for v in values or ():
        seen.setdefault(require_non_empty(v, field_name), None)
    if not seen:
        raise ValidationError(f"Informe ao menos um valor em {field_name}")
    return list(seen)


def require_week_list(values: Iterable, field_name: str = "semanas") -> list[int]:
    weeks = sorted({require_int(v, field_name) for v in values or ()})
    if not weeks:
        raise ValidationError(f"Selecione ao menos uma semana ({field_name})")
    return weeks
