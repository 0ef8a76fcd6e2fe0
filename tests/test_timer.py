# tests/test_timer.py

from __future__ import annotations

from dataclasses import replace

from priority_planner.core import timer as ft
from priority_planner.core.timer import FocusTimer, TimerMode


def _finish(timer: FocusTimer) -> FocusTimer:
    """Run the current interval to completion, one tick at a time."""
    timer = ft.start(timer)
    for _ in range(timer.seconds_remaining + 1):
        timer = ft.tick(timer)
    return timer


def test_initial_state() -> None:
    timer = FocusTimer()
    assert timer.mode == TimerMode.POMODORO
    assert timer.is_running is False
    assert timer.seconds_remaining == 1500
    assert timer.completed_cycles == 0
    assert timer.progress == 0
    assert timer.label == "Focus"


def test_break_sequence_is_short_short_short_long() -> None:
    timer = FocusTimer()
    breaks: list[tuple[TimerMode, int]] = []
    for _ in range(4):
        timer = _finish(timer)
        breaks.append((timer.mode, timer.completed_cycles))
        timer = _finish(timer)
        assert timer.mode == TimerMode.POMODORO

    assert breaks == [
        (TimerMode.SHORT_BREAK, 1),
        (TimerMode.SHORT_BREAK, 2),
        (TimerMode.SHORT_BREAK, 3),
        (TimerMode.LONG_BREAK, 4),
    ]


def test_completion_stops_the_timer_and_loads_the_next_duration() -> None:
    timer = _finish(FocusTimer())
    assert timer.is_running is False
    assert timer.seconds_remaining == 300

    timer = _finish(timer)
    assert timer.is_running is False
    assert timer.seconds_remaining == 1500
    assert timer.completed_cycles == 1


def test_completion_happens_on_the_tick_below_zero() -> None:
    timer = replace(FocusTimer(), is_running=True, seconds_remaining=1)
    timer = ft.tick(timer)
    assert timer.seconds_remaining == 0
    assert timer.mode == TimerMode.POMODORO
    timer = ft.tick(timer)
    assert timer.mode == TimerMode.SHORT_BREAK


def test_start_and_pause_are_idempotent() -> None:
    running = ft.start(FocusTimer())
    assert ft.start(running) is running
    paused = ft.pause(running)
    assert ft.pause(paused) is paused
    assert paused.seconds_remaining == running.seconds_remaining


def test_tick_while_idle_changes_nothing() -> None:
    timer = FocusTimer(seconds_remaining=42)
    assert ft.tick(timer) is timer


def test_reset_clears_cycles_and_mode() -> None:
    timer = replace(FocusTimer(), mode=TimerMode.LONG_BREAK, completed_cycles=7, is_running=True)
    assert ft.reset(timer) == FocusTimer()


def test_progress_and_format_time() -> None:
    timer = FocusTimer(seconds_remaining=750)
    assert timer.progress == 0.5
    assert ft.format_time(1500) == "25:00"
    assert ft.format_time(65) == "01:05"
    assert ft.format_time(0) == "00:00"
