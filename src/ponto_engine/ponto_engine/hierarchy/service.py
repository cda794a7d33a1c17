from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..core.constants import UNASSIGNED_AREA_NAME, UNASSIGNED_AREA_PREFIX, UNASSIGNED_GERAL_ID, UNASSIGNED_GERAL_NAME
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..workers.model import Supervisor, Worker
from .model import AreaNode, GeralNode, HierarchyTree


def _name_key(name: str, node_id: str) -> tuple[str, str]:
    return ((name or "").casefold(), str(node_id))


def scope_workers(role: Role | str, scope_id: Optional[str], workers: Iterable[Worker]) -> list[Worker]:
    """Return the workers a caller with ``role``/``scope_id`` may see."""
    try:
        role = Role(role)
    except ValueError:
        raise ValidationError(f"Papel desconhecido: {role!r}")

    if role in (Role.SUPER_ADMIN, Role.GESTOR):
        return list(workers)
    if role == Role.SERVIDOR:
        raise AuthorizationError("Servidores não acessam o monitoramento de envios")
    if not scope_id:
        raise ValidationError("Informe o id do supervisor")

    if role == Role.SUPERVISOR_GERAL:
        return [w for w in workers if w.supervisor_geral_id == scope_id]
    return [w for w in workers if w.supervisor_area_id == scope_id]


def referenced_supervisor_ids(workers: Iterable[Worker]) -> tuple[set[str], set[str]]:
    """(area ids, geral ids) referenced by the given workers."""
    area_ids: set[str] = set()
    geral_ids: set[str] = set()
    for w in workers:
        if w.supervisor_area_id:
            area_ids.add(w.supervisor_area_id)
        if w.supervisor_geral_id:
            geral_ids.add(w.supervisor_geral_id)
    return area_ids, geral_ids


def build_hierarchy(
    workers: Sequence[Worker],
    area_supervisors: Sequence[Supervisor],
    geral_supervisors: Sequence[Supervisor],
) -> HierarchyTree:
    """Group workers under areas and areas under gerais.

    Every worker lands exactly once: under its area when the area is known,
    otherwise in the unassigned area of its geral (or of the unassigned geral).
    An area whose geral is missing or unknown goes under the unassigned geral.
    """
    areas_by_id = {a.supervisor_id: a for a in area_supervisors}
    gerais_by_id = {g.supervisor_id: g for g in geral_supervisors}

    workers_by_area: dict[str, list[Worker]] = defaultdict(list)
    loose_by_geral: dict[Optional[str], list[Worker]] = defaultdict(list)
    for w in workers:
        if w.supervisor_area_id in areas_by_id:
            workers_by_area[w.supervisor_area_id].append(w)
        else:
            geral_id = w.supervisor_geral_id if w.supervisor_geral_id in gerais_by_id else None
            loose_by_geral[geral_id].append(w)

    def _sorted_workers(items: list[Worker]) -> tuple[Worker, ...]:
        return tuple(sorted(items, key=lambda w: _name_key(w.name, w.worker_id)))

    areas_by_geral: dict[Optional[str], list[AreaNode]] = defaultdict(list)
    for area in sorted(areas_by_id.values(), key=lambda a: _name_key(a.name, a.supervisor_id)):
        geral_id = area.supervisor_geral_id if area.supervisor_geral_id in gerais_by_id else None
        areas_by_geral[geral_id].append(
            AreaNode(
                area_id=area.supervisor_id,
                name=area.name,
                geral_id=geral_id or UNASSIGNED_GERAL_ID,
                workers=_sorted_workers(workers_by_area.get(area.supervisor_id, [])),
            )
        )

    for geral_id, loose in loose_by_geral.items():
        owner = geral_id or UNASSIGNED_GERAL_ID
        areas_by_geral[geral_id].append(
            AreaNode(
                area_id=f"{UNASSIGNED_AREA_PREFIX}{owner}",
                name=UNASSIGNED_AREA_NAME,
                geral_id=owner,
                workers=_sorted_workers(loose),
                synthetic=True,
            )
        )

    gerais = [
        GeralNode(geral_id=g.supervisor_id, name=g.name, areas=tuple(areas_by_geral.get(g.supervisor_id, [])))
        for g in sorted(gerais_by_id.values(), key=lambda g: _name_key(g.name, g.supervisor_id))
    ]
    if areas_by_geral.get(None):
        gerais.append(
            GeralNode(
                geral_id=UNASSIGNED_GERAL_ID,
                name=UNASSIGNED_GERAL_NAME,
                areas=tuple(areas_by_geral[None]),
                synthetic=True,
            )
        )
    return HierarchyTree(gerais=tuple(gerais))
