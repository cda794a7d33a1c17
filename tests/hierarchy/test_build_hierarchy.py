from __future__ import annotations

import pytest

from ponto_engine.core.constants import UNASSIGNED_GERAL_ID
from ponto_engine.core.enums import Role
from ponto_engine.core.exceptions import AuthorizationError, ValidationError
from ponto_engine.hierarchy.service import build_hierarchy, scope_workers
from ponto_engine.workers.model import Supervisor, Worker


def _split(repo):
    sups = repo.get_supervisors(["g1", "a1", "a2"])
    areas = [s for s in sups if s.role == Role.SUPERVISOR_AREA]
    gerais = [s for s in sups if s.role == Role.SUPERVISOR_GERAL]
    return areas, gerais


def test_every_worker_appears_exactly_once(workers_repo):
    workers = workers_repo.list_workers()
    areas, gerais = _split(workers_repo)

    tree = build_hierarchy(workers, areas, gerais)

    ids = tree.worker_ids()
    assert sorted(ids) == sorted(w.worker_id for w in workers)
    assert len(ids) == len(set(ids))


def test_unassigned_buckets_are_created_per_level(workers_repo):
    areas, gerais = _split(workers_repo)
    tree = build_hierarchy(workers_repo.list_workers(), areas, gerais)

    g1, loose = tree.gerais
    assert g1.geral_id == "g1"
    assert [a.area_id for a in g1.areas] == ["a1", "a2", "sem-area-g1"]
    assert [w.worker_id for w in g1.areas[-1].workers] == ["w6"]
    assert g1.areas[-1].synthetic

    assert loose.geral_id == UNASSIGNED_GERAL_ID and loose.synthetic
    assert [w.worker_id for a in loose.areas for w in a.workers] == ["w7"]


def test_ordering_is_by_display_name_case_insensitive():
    workers = [
        Worker(worker_id="3", name="carlos", supervisor_area_id="a"),
        Worker(worker_id="1", name="Bia", supervisor_area_id="a"),
        Worker(worker_id="2", name="ana", supervisor_area_id="a"),
    ]
    areas = [
        Supervisor(supervisor_id="a", name="Zeta", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g"),
        Supervisor(supervisor_id="b", name="alfa", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g"),
    ]
    gerais = [Supervisor(supervisor_id="g", name="G", role=Role.SUPERVISOR_GERAL)]

    tree = build_hierarchy(workers, areas, gerais)

    (g,) = tree.gerais
    assert [a.name for a in g.areas] == ["alfa", "Zeta"]
    assert [w.name for w in g.areas[1].workers] == ["ana", "Bia", "carlos"]


def test_unknown_references_fall_into_unassigned_buckets():
    workers = [
        Worker(worker_id="1", name="A", supervisor_area_id="ghost", supervisor_geral_id="g"),
        Worker(worker_id="2", name="B", supervisor_area_id="orphan-area"),
        Worker(worker_id="3", name="C", supervisor_geral_id="ghost-geral"),
    ]
    areas = [Supervisor(supervisor_id="orphan-area", name="Órfã", role=Role.SUPERVISOR_AREA)]
    gerais = [Supervisor(supervisor_id="g", name="G", role=Role.SUPERVISOR_GERAL)]

    tree = build_hierarchy(workers, areas, gerais)

    g, loose = tree.gerais
    assert [(a.area_id, [w.worker_id for w in a.workers]) for a in g.areas] == [("sem-area-g", ["1"])]
    assert [(a.area_id, [w.worker_id for w in a.workers]) for a in loose.areas] == [
        ("orphan-area", ["2"]),
        ("sem-area-sem-geral", ["3"]),
    ]


def test_build_is_deterministic(workers_repo):
    areas, gerais = _split(workers_repo)
    workers = list(workers_repo.list_workers())
    assert build_hierarchy(workers, areas, gerais) == build_hierarchy(list(reversed(workers)), areas[::-1], gerais)


def test_empty_input_gives_empty_tree():
    assert build_hierarchy([], [], []).gerais == ()


def test_scope_workers_by_role(workers_repo):
    workers = workers_repo.list_workers()
    assert len(scope_workers(Role.SUPER_ADMIN, None, workers)) == 7
    assert len(scope_workers("gestor", None, workers)) == 7
    assert {w.worker_id for w in scope_workers("supervisor_geral", "g1", workers)} == {"w1", "w2", "w3", "w4", "w5", "w6"}
    assert {w.worker_id for w in scope_workers(Role.SUPERVISOR_AREA, "a2", workers)} == {"w3", "w4", "w5"}


def test_scope_workers_rejects_servidor_and_unknown_roles(workers_repo):
    workers = workers_repo.list_workers()
    with pytest.raises(AuthorizationError):
        scope_workers(Role.SERVIDOR, "w1", workers)
    with pytest.raises(ValidationError):
        scope_workers("root", None, workers)
    with pytest.raises(ValidationError):
        scope_workers(Role.SUPERVISOR_AREA, None, workers)
