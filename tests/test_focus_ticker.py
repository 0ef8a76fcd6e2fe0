# tests/test_focus_ticker.py

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from priority_planner.connectors.focus_ticker import run_focus_ticker
from priority_planner.core.commands import StartTimer
from priority_planner.core.timer import MODE_DURATIONS, TimerMode


@pytest.mark.asyncio
async def test_ticker_counts_down_a_running_timer(session) -> None:
    session.dispatch(StartTimer())
    stop = asyncio.Event()

    runner = asyncio.create_task(run_focus_ticker(session, interval_seconds=0.001, stop_event=stop))

    await asyncio.sleep(0.05)
    stop.set()
    await runner

    assert session.timer.seconds_remaining < MODE_DURATIONS[TimerMode.POMODORO]


@pytest.mark.asyncio
async def test_ticker_leaves_an_idle_timer_alone(session) -> None:
    before = session.timer
    runner = asyncio.create_task(run_focus_ticker(session, interval_seconds=0.001))

    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert session.timer is before


@pytest.mark.asyncio
async def test_ticker_forwards_completion_notices(session) -> None:
    # Start one second before the end of a focus interval.
    session.dispatch(StartTimer())
    session._state = replace(session.state, timer=replace(session.timer, seconds_remaining=0))
    notices: list[object] = []
    stop = asyncio.Event()

    runner = asyncio.create_task(
        run_focus_ticker(session, interval_seconds=0.001, on_notice=notices.append, stop_event=stop)
    )
    await asyncio.sleep(0.05)
    stop.set()
    await runner

    assert len(notices) == 1
    assert session.timer.mode == TimerMode.SHORT_BREAK
    assert session.timer.is_running is False
