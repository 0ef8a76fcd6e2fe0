# src/priority_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, opens the planner session (rollover runs
here, before any command is accepted), then starts:
- the focus ticker in a background thread (optional),
- the console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..cli.commands import format_notice
from ..config import get_settings
from ..connectors.console_connector import print_notice, run_console_loop
from ..connectors.focus_ticker import FocusTickerRunner, start_focus_ticker_in_background
from ..core.errors import GatewayUnavailable
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except GatewayUnavailable:
        logger.exception("Cannot open local storage; exiting.")
        raise SystemExit(1)

    notice = state.session.open()
    if notice is not None:
        print(format_notice(notice))

    ticker: FocusTickerRunner | None = None
    if settings.timer_enabled:
        ticker = start_focus_ticker_in_background(
            state.session,
            interval_seconds=settings.focus_tick_seconds,
            on_notice=print_notice,
        )

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Some platforms may not support SIGTERM.
        pass

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Running the focus ticker only. Press Ctrl+C to stop.")
            try:
                stop_main.wait()
            except KeyboardInterrupt:
                pass
    finally:
        if ticker is not None:
            ticker.stop()
            ticker.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
