from __future__ import annotations

import threading

from ponto_engine.core.enums import RecordStatus
from ponto_engine.records.day_rules import normalize_days
from ponto_engine.records.memory_record_repository import InMemoryRecordRepository
from ponto_engine.records.service import RecordService


def _run_concurrently(n, target):
    barrier = threading.Barrier(n)
    errors = []

    def worker(i):
        barrier.wait()
        try:
            target(i)
        except Exception as e:  # collected for the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors


def test_concurrent_first_writes_create_a_single_record(week):
    repo = InMemoryRecordRepository()
    svc = RecordService(repo)

    errors = _run_concurrently(8, lambda i: svc.write_record("W", 2026, 3, week(production=i)))

    assert errors == []
    summaries = repo.list_summaries(worker_ids=["W"], year=2026, weeks=[3])
    assert len(summaries) == 1
    assert repo.get(worker_id="W", year=2026, week=3).record_id == 1


def test_concurrent_overlapping_submits_leave_set_fully_submitted(week):
    repo = InMemoryRecordRepository()
    svc = RecordService(repo)
    for w in ("a", "b", "c"):
        svc.write_record(w, 2026, 3, week())

    sets = [["a", "b"], ["b", "c"], ["a", "b", "c"], ["c", "a"]]
    errors = _run_concurrently(len(sets), lambda i: svc.submit_period(sets[i], 2026, [3]))

    assert errors == []
    assert all(repo.get(worker_id=w, year=2026, week=3).status == RecordStatus.SUBMITTED for w in "abc")


def test_rewrite_keeps_entry_ids_of_surviving_days(week):
    repo = InMemoryRecordRepository()
    first = repo.save_draft(
        worker_id="W", year=2026, week=3, saturday_active=True, notes="",
        entries=normalize_days(week(saturday=True), saturday_active=True),
    )
    second = repo.save_draft(
        worker_id="W", year=2026, week=3, saturday_active=False, notes="",
        entries=normalize_days(week(), saturday_active=False),
    )
    ids_before = {e.day_of_week: e.entry_id for e in first.entries}
    ids_after = {e.day_of_week: e.entry_id for e in second.entries}
    assert ids_after == {d: ids_before[d] for d in range(1, 6)}


def test_list_summaries_filters_by_worker_year_and_week(week):
    repo = InMemoryRecordRepository()
    svc = RecordService(repo)
    svc.write_record("a", 2026, 3, week(production=2))
    svc.write_record("a", 2026, 4, week())
    svc.write_record("b", 2026, 3, week())
    svc.write_record("a", 2025, 3, week())

    rows = repo.list_summaries(worker_ids=["a"], year=2026, weeks=[3])
    assert [(r.worker_id, r.year, r.week, r.worked_days, r.production) for r in rows] == [("a", 2026, 3, 5, 10.0)]


def test_delete_drops_record_with_its_entries(week):
    repo = InMemoryRecordRepository()
    repo.save_draft(
        worker_id="W", year=2026, week=3, saturday_active=False, notes="",
        entries=normalize_days(week(), saturday_active=False),
    )

    assert repo.delete(worker_id="W", year=2026, week=3) is True
    assert repo.get(worker_id="W", year=2026, week=3) is None
    assert repo.delete(worker_id="W", year=2026, week=3) is False

    fresh = repo.save_draft(
        worker_id="W", year=2026, week=3, saturday_active=False, notes="",
        entries=normalize_days(week(), saturday_active=False),
    )
    assert fresh.record_id == 2
    assert [e.entry_id for e in fresh.entries] == [6, 7, 8, 9, 10]
