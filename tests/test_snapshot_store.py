# tests/test_snapshot_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from priority_planner.core.buckets import BucketStore
from priority_planner.core.errors import GatewayUnavailable
from priority_planner.core.models import Priority, TimeCategory
from priority_planner.core.session import PlannerSession
from priority_planner.core.snapshot import Snapshot
from priority_planner.storage.snapshot_store import SnapshotStore

from .fakes import MONDAY, FakeSnapshotRepo, FakeTransformer


def test_load_missing_document_returns_none(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "db.sqlite3")
    assert store.load() is None


def test_snapshot_round_trip(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "db.sqlite3")
    buckets = BucketStore.empty().add_task(TimeCategory.THIS_WEEK, Priority.LOW, "water plants", task_id="t1")
    snap = Snapshot(buckets=buckets, goals=(), last_visited_date="Mon Oct 19 2026")

    store.save(snap.to_dict())

    reopened = SnapshotStore(tmp_path / "db.sqlite3")
    assert Snapshot.from_dict(reopened.load()) == snap


def test_save_merges_top_level_keys(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "db.sqlite3")
    store.save({"tasks": {}, "lastVisitedDate": "Sun Oct 18 2026", "theme": "dark"})
    store.save({"lastVisitedDate": "Mon Oct 19 2026"})

    data = store.load()
    assert data == {"tasks": {}, "lastVisitedDate": "Mon Oct 19 2026", "theme": "dark"}


def test_documents_are_isolated_by_id(tmp_path: Path) -> None:
    a = SnapshotStore(tmp_path / "db.sqlite3", document_id="a")
    b = SnapshotStore(tmp_path / "db.sqlite3", document_id="b")
    a.save({"lastVisitedDate": "x"})
    assert b.load() is None

    a.delete()
    assert a.load() is None


def test_corrupt_body_raises_gateway_unavailable(tmp_path: Path) -> None:
    db = tmp_path / "db.sqlite3"
    store = SnapshotStore(db)
    conn = sqlite3.connect(str(db))
    conn.execute("INSERT INTO documents(id, body, updated_at) VALUES ('appData', 'not json', 0)")
    conn.commit()
    conn.close()

    with pytest.raises(GatewayUnavailable):
        store.load()


def test_unopenable_path_raises_gateway_unavailable(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(GatewayUnavailable):
        SnapshotStore(blocker / "db.sqlite3")


def test_malformed_goal_sections_are_ignored() -> None:
    base = {"tasks": {}, "lastVisitedDate": "Mon Oct 19 2026"}

    for bad in (5, True, "goals", {"id": "g1"}):
        snap = Snapshot.from_dict({**base, "goals": bad})
        assert snap.goals == ()
        assert snap.last_visited_date == "Mon Oct 19 2026"

    snap = Snapshot.from_dict({**base, "goals": [{"id": "g1", "title": "Learn Go", "milestones": 3}]})
    assert [g.id for g in snap.goals] == ["g1"]
    assert snap.goals[0].milestones == ()


def test_session_opens_over_a_document_with_malformed_goals() -> None:
    repo = FakeSnapshotRepo({"tasks": {}, "goals": True, "lastVisitedDate": "Mon Oct 19 2026"})
    session = PlannerSession(repo, FakeTransformer(), clock=lambda: MONDAY)

    assert session.open() is None
    assert session.snapshot.goals == ()
    assert repo.data["goals"] == []
