# tests/test_console_connector.py

from __future__ import annotations

from priority_planner.connectors import console_connector
from priority_planner.core.commands import ShowInfo
from priority_planner.core.models import Priority, TimeCategory


def test_console_loop_runs_commands_until_exit(state, monkeypatch, capsys) -> None:
    lines = iter(["", "hello", "/add week low stretch", "/list", "/exit", "/add today high never"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    console_connector.run_console_loop(state)

    out = capsys.readouterr().out
    assert "Commands start with '/'" in out
    assert "Added to This Week/Low." in out
    assert "stretch" in out
    assert [t.text for t in state.session.buckets.bucket(TimeCategory.THIS_WEEK, Priority.LOW)] == ["stretch"]
    assert state.session.buckets.bucket(TimeCategory.TODAY, Priority.HIGH) == ()


def test_console_loop_stops_on_eof(state, monkeypatch) -> None:
    def _eof(_prompt: str = "") -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    console_connector.run_console_loop(state)


def test_print_notice_formats_with_timestamp(capsys) -> None:
    console_connector.print_notice(ShowInfo("Break is over. Ready to focus?"))
    out = capsys.readouterr().out
    assert out.startswith("[")
    assert "[INFO] Break is over. Ready to focus?" in out
