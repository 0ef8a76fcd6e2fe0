# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from priority_planner.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_planner_logs_and_quiets_the_ticker() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("priority_planner.core.session", logging.INFO))
    assert not f.filter(_record("priority_planner.connectors.focus_ticker", logging.INFO))
    assert f.filter(_record("priority_planner.connectors.focus_ticker", logging.WARNING))
    assert not f.filter(_record("httpx", logging.WARNING))
    assert f.filter(_record("httpx", logging.ERROR))
    assert not f.filter(_record("priority_planner_other", logging.INFO))


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_the_planner_log(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")
    setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("priority_planner.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "planner.log"
    assert len(logging.getLogger().handlers) == 2
    assert "hello file" in log_file.read_text(encoding="utf-8")
