# src/priority_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "priority_planner"

# Loggers fed from the focus-ticker thread. Their INFO lines would land in the
# middle of the user's typing at the ">>>" prompt.
BACKGROUND_LOGGERS = ("priority_planner.connectors.focus_ticker",)

LOG_FILE_NAME = "planner.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console-only filter for the planner REPL.

    Planner records pass, except the background ticker below WARNING.
    Libraries (openai, httpx, sqlite, captured py.warnings) show ERROR+ only.
    The file handler is unfiltered.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            if name.startswith(BACKGROUND_LOGGERS):
                return record.levelno >= logging.WARNING
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/priority",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the planner's two handlers on the root logger and return the log file path.

    stderr gets the filtered console view; `<log_dir>/planner.log` gets every
    record at file_level. Existing root handlers are replaced, so calling this
    again (tests, restarts) does not duplicate output.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    planner_file = logging.FileHandler(str(log_file), encoding="utf-8")
    planner_file.setLevel(file_level)
    planner_file.setFormatter(fmt)
    root.addHandler(planner_file)

    logging.captureWarnings(True)
    return log_file
