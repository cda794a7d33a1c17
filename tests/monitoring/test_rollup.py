from __future__ import annotations

from datetime import datetime

import pytest

from ponto_engine.core.enums import CompletionStatus, RecordStatus, Role
from ponto_engine.core.exceptions import ValidationError
from ponto_engine.hierarchy.service import build_hierarchy
from ponto_engine.monitoring.aggregator import RollupAggregator, filter_rollup
from ponto_engine.monitoring.model import CompletionStats, classify
from ponto_engine.records.model import RecordSummary
from ponto_engine.workers.model import Supervisor, Worker


def _tree():
    workers = [
        Worker(worker_id="w1", name="Ana", supervisor_area_id="a1", supervisor_geral_id="g"),
        Worker(worker_id="w2", name="Bruno", supervisor_area_id="a1", supervisor_geral_id="g"),
        Worker(worker_id="w3", name="Carla", supervisor_area_id="a2", supervisor_geral_id="g"),
        Worker(worker_id="w4", name="Diego", supervisor_area_id="a2", supervisor_geral_id="g"),
        Worker(worker_id="w5", name="Elisa", supervisor_area_id="a2", supervisor_geral_id="g"),
    ]
    areas = [
        Supervisor(supervisor_id="a1", name="A1", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g"),
        Supervisor(supervisor_id="a2", name="A2", role=Role.SUPERVISOR_AREA, supervisor_geral_id="g"),
    ]
    gerais = [Supervisor(supervisor_id="g", name="G", role=Role.SUPERVISOR_GERAL)]
    return build_hierarchy(workers, areas, gerais)


def _summary(worker, week, status=RecordStatus.SUBMITTED, *, year=2026, worked=5, production=10.0, at=None):
    return RecordSummary(
        worker_id=worker,
        year=year,
        week=week,
        status=status,
        worked_days=worked,
        production=production,
        updated_at=at,
    )


def test_geral_with_two_areas_reports_partial():
    summaries = [_summary(w, 3) for w in ("w1", "w2", "w3")]

    result = RollupAggregator().rollup(_tree(), 2026, [3], summaries)

    g = result.find_geral("g")
    assert (g.submitted_count, g.total) == (3, 5)
    assert g.completion_rate == pytest.approx(0.6)
    assert g.status == CompletionStatus.PARTIAL

    a1, a2 = g.areas
    assert (a1.submitted_count, a1.total, a1.status) == (2, 2, CompletionStatus.COMPLETE)
    assert (a2.submitted_count, a2.total, a2.status) == (1, 3, CompletionStatus.PARTIAL)
    assert (result.summary.submitted_count, result.summary.pending_count) == (3, 2)


def test_drafts_do_not_count_as_submitted_but_add_to_totals():
    summaries = [_summary("w1", 3, RecordStatus.DRAFT, worked=4, production=2.5)]

    result = RollupAggregator().rollup(_tree(), 2026, [3], summaries)

    assert result.summary.submitted_count == 0
    assert result.summary.status == CompletionStatus.PENDING
    assert result.summary.worked_days == 4
    assert result.summary.production == 2.5


def test_multi_week_selection_requires_every_week():
    summaries = [_summary("w1", 3), _summary("w1", 4), _summary("w2", 3)]

    result = RollupAggregator().rollup(_tree(), 2026, [3, 4], summaries)

    a1 = result.find_geral("g").areas[0]
    by_id = {w.worker_id: w for w in a1.workers}
    assert by_id["w1"].submitted is True
    assert by_id["w2"].submitted is False
    assert by_id["w2"].submitted_weeks == (3,)
    assert a1.submitted_count == 1


def test_records_outside_selection_are_ignored():
    summaries = [_summary("w1", 2), _summary("w1", 3, year=2025)]
    result = RollupAggregator().rollup(_tree(), 2026, [3], summaries)
    assert result.summary.submitted_count == 0
    assert result.summary.production == 0


def test_submitted_at_is_latest_submission_when_covered():
    summaries = [_summary("w1", 3, at=datetime(2026, 1, 20, 9)), _summary("w1", 4, at=datetime(2026, 1, 27, 9))]
    result = RollupAggregator().rollup(_tree(), 2026, [3, 4], summaries)
    w1 = result.find_geral("g").areas[0].workers[0]
    assert w1.submitted_at == datetime(2026, 1, 27, 9)


def test_empty_node_has_zero_rate_and_pending_status():
    stats = CompletionStats(total=0, submitted_count=0, worked_days=0, production=0.0)
    assert stats.completion_rate == 0.0
    assert stats.status == CompletionStatus.PENDING


def test_empty_week_selection_is_rejected():
    with pytest.raises(ValidationError):
        RollupAggregator().rollup(_tree(), 2026, [], [])


def test_rates_never_decrease_as_workers_submit():
    order = ["w3", "w1", "w5", "w2", "w4"]
    rank = {CompletionStatus.PENDING: 0, CompletionStatus.PARTIAL: 1, CompletionStatus.COMPLETE: 2}
    previous = None
    for i in range(len(order) + 1):
        summaries = [_summary(w, 3) for w in order[:i]]
        result = RollupAggregator().rollup(_tree(), 2026, [3], summaries)
        g = result.find_geral("g")
        nodes = [result.summary, g, *g.areas]
        snapshot = [(n.completion_rate, rank[n.status]) for n in nodes]
        if previous:
            for (rate_before, status_before), (rate_after, status_after) in zip(previous, snapshot):
                assert rate_after >= rate_before
                assert status_after >= status_before
        previous = snapshot
    assert result.summary.status == CompletionStatus.COMPLETE


def test_classify_boundaries():
    assert classify(0, 5) == CompletionStatus.PENDING
    assert classify(1, 5) == CompletionStatus.PARTIAL
    assert classify(5, 5) == CompletionStatus.COMPLETE
    assert classify(0, 0) == CompletionStatus.PENDING


def test_filter_rollup_modes():
    tree = _tree()
    partial = RollupAggregator().rollup(tree, 2026, [3], [_summary("w1", 3)])
    complete = RollupAggregator().rollup(tree, 2026, [3], [_summary(w, 3) for w in ("w1", "w2", "w3", "w4", "w5")])

    assert len(filter_rollup(partial, "pending").gerais) == 1
    assert filter_rollup(partial, "complete").gerais == ()
    assert len(filter_rollup(complete, "complete").gerais) == 1
    assert filter_rollup(partial, "all") is partial
    with pytest.raises(ValidationError):
        filter_rollup(partial, "late")
