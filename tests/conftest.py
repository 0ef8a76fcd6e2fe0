# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from priority_planner.core.session import PlannerSession
from priority_planner.core.state import AppState

from .fakes import MONDAY, FakeLLMClient, FakeSnapshotRepo, FakeTransformer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="priority-test",
        data_dir=tmp_path,
        snapshot_db_path=tmp_path / "planner.sqlite3",
        document_id="appData",
        llm_models=["fake/model"],
        focus_tick_seconds=0.01,
        timer_enabled=False,
        console_enabled=False,
    )


@pytest.fixture()
def repo() -> FakeSnapshotRepo:
    return FakeSnapshotRepo()


@pytest.fixture()
def transformer() -> FakeTransformer:
    return FakeTransformer()


@pytest.fixture()
def session(repo: FakeSnapshotRepo, transformer: FakeTransformer) -> PlannerSession:
    """Opened session on a fixed Monday, backed by in-memory fakes."""
    s = PlannerSession(repo, transformer, clock=lambda: MONDAY)
    assert s.open() is None
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, repo: FakeSnapshotRepo, session: PlannerSession) -> AppState:
    return AppState(
        settings=settings,
        llm=FakeLLMClient(),
        snapshot_repo=repo,
        session=session,
        llm_online=False,
    )
