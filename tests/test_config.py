# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from priority_planner.config import Settings


def test_settings_read_prefixed_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PRIORITY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PRIORITY_LLM_MODELS", "a/one, b/two")
    monkeypatch.setenv("PRIORITY_TIMER_ENABLED", "no")
    monkeypatch.setenv("PRIORITY_FOCUS_TICK_SECONDS", "0.5")

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.snapshot_db_path == tmp_path / "planner.sqlite3"
    assert s.llm_models == ["a/one", "b/two"]
    assert s.timer_enabled is False
    assert s.focus_tick_seconds == 0.5


def test_malformed_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("PRIORITY_FOCUS_TICK_SECONDS", "fast")
    monkeypatch.setenv("PRIORITY_LLM_READ_TIMEOUT_SECONDS", "1")
    monkeypatch.setenv("PRIORITY_LLM_FIRST_TOKEN_TIMEOUT_SECONDS", "30")
    monkeypatch.delenv("PRIORITY_DOCUMENT_ID", raising=False)

    s = Settings.from_env()

    assert s.focus_tick_seconds == 1.0
    assert s.llm_read_timeout == 30.0
    assert s.document_id == "appData"
