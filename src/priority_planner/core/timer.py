# src/priority_planner/core/timer.py

"""
Focus timer state machine (Pomodoro style).

Pure transitions only: the host feeds one tick() per second while the timer
is running (see connectors/focus_ticker.py). Completion happens inside the
tick that takes seconds_remaining below zero.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class TimerMode(StrEnum):
    POMODORO = "pomodoro"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


MODE_DURATIONS: dict[TimerMode, int] = {
    TimerMode.POMODORO: 25 * 60,
    TimerMode.SHORT_BREAK: 5 * 60,
    TimerMode.LONG_BREAK: 15 * 60,
}

MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.POMODORO: "Focus",
    TimerMode.SHORT_BREAK: "Short Break",
    TimerMode.LONG_BREAK: "Long Break",
}

CYCLES_PER_LONG_BREAK = 4


@dataclass(frozen=True, slots=True)
class FocusTimer:
    mode: TimerMode = TimerMode.POMODORO
    is_running: bool = False
    seconds_remaining: int = MODE_DURATIONS[TimerMode.POMODORO]
    completed_cycles: int = 0

    @property
    def total_duration(self) -> int:
        return MODE_DURATIONS[self.mode]

    @property
    def progress(self) -> float:
        # May read slightly negative on the tick that triggers completion.
        total = self.total_duration
        return (total - self.seconds_remaining) / total

    @property
    def label(self) -> str:
        return MODE_LABELS[self.mode]


def start(timer: FocusTimer) -> FocusTimer:
    return timer if timer.is_running else replace(timer, is_running=True)


def pause(timer: FocusTimer) -> FocusTimer:
    return replace(timer, is_running=False) if timer.is_running else timer


def reset(_timer: FocusTimer | None = None) -> FocusTimer:
    return FocusTimer()


def complete(timer: FocusTimer) -> FocusTimer:
    """Finish the current interval: stop, count the cycle, pick the next mode."""
    if timer.mode == TimerMode.POMODORO:
        cycles = timer.completed_cycles + 1
        mode = TimerMode.LONG_BREAK if cycles % CYCLES_PER_LONG_BREAK == 0 else TimerMode.SHORT_BREAK
    else:
        cycles = timer.completed_cycles
        mode = TimerMode.POMODORO
    return FocusTimer(mode=mode, is_running=False, seconds_remaining=MODE_DURATIONS[mode], completed_cycles=cycles)


def tick(timer: FocusTimer) -> FocusTimer:
    if not timer.is_running:
        return timer
    remaining = timer.seconds_remaining - 1
    if remaining < 0:
        return complete(timer)
    return replace(timer, seconds_remaining=remaining)


def format_time(seconds: int) -> str:
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{secs:02d}"
