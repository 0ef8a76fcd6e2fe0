# src/priority_planner/core/commands.py

"""
Closed set of planner commands and notices.

Commands are the only way to change PlannerState. apply_command() is pure:
it never touches persistence and never raises for stale ids (those are no-ops).
Notices are what the session hands back to the host for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from . import goals as goal_ops
from . import timer as timer_ops
from .buckets import BucketStore
from .models import BucketKey, Priority, TimeCategory
from .reassign import move_task
from .snapshot import Snapshot
from .timer import FocusTimer


@dataclass(frozen=True, slots=True)
class PlannerState:
    snapshot: Snapshot = field(default_factory=Snapshot)
    timer: FocusTimer = field(default_factory=FocusTimer)


# ---- task commands ----


@dataclass(frozen=True, slots=True)
class AddTask:
    category: TimeCategory
    priority: Priority
    text: str
    task_id: str | None = None


@dataclass(frozen=True, slots=True)
class EditTask:
    category: TimeCategory
    priority: Priority
    task_id: str
    text: str


@dataclass(frozen=True, slots=True)
class DeleteTask:
    category: TimeCategory
    priority: Priority
    task_id: str


@dataclass(frozen=True, slots=True)
class ToggleTask:
    category: TimeCategory
    priority: Priority
    task_id: str


@dataclass(frozen=True, slots=True)
class MoveTask:
    """Built once a drop is confirmed; hover state never reaches the core."""

    task_id: str
    source: BucketKey
    target: BucketKey


# ---- goal commands ----


@dataclass(frozen=True, slots=True)
class AddGoal:
    title: str
    description: str = ""
    target_year: int | None = None
    goal_id: str | None = None


@dataclass(frozen=True, slots=True)
class EditGoal:
    goal_id: str
    title: str | None = None
    description: str | None = None
    target_year: int | None = None


@dataclass(frozen=True, slots=True)
class DeleteGoal:
    goal_id: str


@dataclass(frozen=True, slots=True)
class AddMilestone:
    goal_id: str
    text: str
    milestone_id: str | None = None


@dataclass(frozen=True, slots=True)
class ToggleMilestone:
    goal_id: str
    milestone_id: str


@dataclass(frozen=True, slots=True)
class ResetAll:
    """Clear every bucket and every goal."""


# ---- timer commands ----


@dataclass(frozen=True, slots=True)
class StartTimer:
    pass


@dataclass(frozen=True, slots=True)
class PauseTimer:
    pass


@dataclass(frozen=True, slots=True)
class ResetTimer:
    pass


@dataclass(frozen=True, slots=True)
class Tick:
    pass


Command = (
    AddTask
    | EditTask
    | DeleteTask
    | ToggleTask
    | MoveTask
    | AddGoal
    | EditGoal
    | DeleteGoal
    | AddMilestone
    | ToggleMilestone
    | ResetAll
    | StartTimer
    | PauseTimer
    | ResetTimer
    | Tick
)

TIMER_COMMANDS = (StartTimer, PauseTimer, ResetTimer, Tick)


# ---- notices ----


@dataclass(frozen=True, slots=True)
class ShowError:
    message: str


@dataclass(frozen=True, slots=True)
class ShowInfo:
    message: str


@dataclass(frozen=True, slots=True)
class ShowReview:
    content: str


Notice = ShowError | ShowInfo | ShowReview


def _apply_buckets(snapshot: Snapshot, command: Command) -> BucketStore | None:
    store = snapshot.buckets
    if isinstance(command, AddTask):
        return store.add_task(command.category, command.priority, command.text, task_id=command.task_id)
    if isinstance(command, EditTask):
        return store.edit_task(command.category, command.priority, command.task_id, command.text)
    if isinstance(command, DeleteTask):
        return store.delete_task(command.category, command.priority, command.task_id)
    if isinstance(command, ToggleTask):
        return store.toggle_complete(command.category, command.priority, command.task_id)
    if isinstance(command, MoveTask):
        return move_task(store, command.task_id, command.source, command.target)
    return None


def _apply_goals(snapshot: Snapshot, command: Command) -> tuple | None:
    goals = snapshot.goals
    if isinstance(command, AddGoal):
        return goal_ops.add_goal(
            goals, command.title, command.description, command.target_year, goal_id=command.goal_id
        )
    if isinstance(command, EditGoal):
        return goal_ops.update_goal(
            goals,
            command.goal_id,
            title=command.title,
            description=command.description,
            target_year=command.target_year,
        )
    if isinstance(command, DeleteGoal):
        return goal_ops.delete_goal(goals, command.goal_id)
    if isinstance(command, AddMilestone):
        return goal_ops.add_milestone(goals, command.goal_id, command.text, milestone_id=command.milestone_id)
    if isinstance(command, ToggleMilestone):
        return goal_ops.toggle_milestone(goals, command.goal_id, command.milestone_id)
    return None


def _apply_timer(timer: FocusTimer, command: Command) -> FocusTimer | None:
    if isinstance(command, StartTimer):
        return timer_ops.start(timer)
    if isinstance(command, PauseTimer):
        return timer_ops.pause(timer)
    if isinstance(command, ResetTimer):
        return timer_ops.reset(timer)
    if isinstance(command, Tick):
        return timer_ops.tick(timer)
    return None


def apply_command(state: PlannerState, command: Command) -> PlannerState:
    """
    Return the state after `command`.

    The same object is returned when nothing changed, so callers can use
    identity to decide whether a save is needed.
    """
    snapshot = state.snapshot

    if isinstance(command, ResetAll):
        cleared = replace(snapshot, buckets=BucketStore.empty(), goals=())
        return replace(state, snapshot=cleared)

    buckets = _apply_buckets(snapshot, command)
    if buckets is not None:
        if buckets is snapshot.buckets:
            return state
        return replace(state, snapshot=replace(snapshot, buckets=buckets))

    goals = _apply_goals(snapshot, command)
    if goals is not None:
        if goals is snapshot.goals:
            return state
        return replace(state, snapshot=replace(snapshot, goals=goals))

    timer = _apply_timer(state.timer, command)
    if timer is not None:
        if timer == state.timer:
            return state
        return replace(state, timer=timer)

    raise TypeError(f"unknown command: {command!r}")
