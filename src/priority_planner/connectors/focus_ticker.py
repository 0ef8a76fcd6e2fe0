# src/priority_planner/connectors/focus_ticker.py

from __future__ import annotations

"""
Focus ticker.

The timer state machine is pure (core/timer.py); this is the host side that
feeds it one tick per interval while it runs. It lives in its own thread with
its own event loop, because the console REPL is blocking (input()).

To stop the coroutine, set stop_event or cancel the task.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from ..core.commands import Notice
from ..core.session import PlannerSession

logger = logging.getLogger(__name__)

NoticeSink = Callable[[Notice], None]


async def run_focus_ticker(
        session: PlannerSession,
        *,
        interval_seconds: float = 1.0,
        on_notice: NoticeSink | None = None,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Every interval_seconds:
    - skip if the timer is not running
    - feed one tick into the session
    - forward a completion notice (if any) to on_notice
    """
    sleep_s = max(0.001, float(interval_seconds))

    while True:
        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)
            if stop_event.is_set():
                logger.debug("Focus ticker stop requested.")
                return

        if not session.timer.is_running:
            continue

        try:
            notice = session.tick()
        except Exception:
            logger.exception("Focus tick failed")
            continue

        if notice is not None and on_notice is not None:
            try:
                on_notice(notice)
            except Exception:
                logger.warning("Focus notice sink failed.", exc_info=True)


@dataclass
class FocusTickerRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Focus ticker loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_focus_ticker_in_background(
        session: PlannerSession,
        *,
        interval_seconds: float = 1.0,
        on_notice: NoticeSink | None = None,
) -> FocusTickerRunner | None:
    """Start the ticker coroutine on its own event loop in a daemon thread."""
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_focus_ticker(
                    session,
                    interval_seconds=interval_seconds,
                    on_notice=on_notice,
                    stop_event=stop_event,
                )
            )
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="focus-ticker", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Focus ticker thread did not initialize properly.")
        return None

    logger.info("Focus ticker started (interval=%.2fs).", interval_seconds)
    return FocusTickerRunner(thread=t, loop=loop, stop_event=stop_event)
