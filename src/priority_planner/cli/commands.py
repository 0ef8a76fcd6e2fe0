# src/priority_planner/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.commands import (
    AddGoal,
    AddMilestone,
    AddTask,
    DeleteGoal,
    DeleteTask,
    EditGoal,
    EditTask,
    MoveTask,
    Notice,
    PauseTimer,
    ResetAll,
    ResetTimer,
    ShowError,
    ShowInfo,
    ShowReview,
    StartTimer,
    ToggleMilestone,
    ToggleTask,
)
from ..core.goals import goal_progress
from ..core.models import PRIORITY_LEVELS, TIME_CATEGORIES, BucketKey, Goal, Priority, Task, TimeCategory
from ..core.state import AppState
from ..core.stats import category_header, format_task_timestamp
from ..core.timer import format_time

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

ID_WIDTH = 8


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValueError as e:
            # Bad user input (blank text, unknown category...): report, keep going.
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting helpers ----


def format_notice(notice: Notice | None) -> str | None:
    if notice is None:
        return None
    if isinstance(notice, ShowError):
        return f"[ERROR] {notice.message}"
    if isinstance(notice, ShowInfo):
        return f"[INFO] {notice.message}"
    if isinstance(notice, ShowReview):
        return f"Your Weekly Review:\n{notice.content}"
    raise TypeError(f"unknown notice: {notice!r}")


def _ok(notice: Notice | None, text: str) -> str:
    shown = format_notice(notice)
    return f"{text}\n{shown}" if shown else text


def _short_id(raw_id: str) -> str:
    return raw_id[:ID_WIDTH]


def _format_task(task: Task) -> str:
    mark = "x" if task.is_completed else " "
    stamp = format_task_timestamp(task.created_at)
    suffix = f"  ({stamp})" if stamp else ""
    return f"[{mark}] {_short_id(task.id)} {task.text}{suffix}"


def render_board(state: AppState, today: date | None = None) -> str:
    today = today or date.today()
    buckets = state.session.buckets
    lines: list[str] = []
    for category in TIME_CATEGORIES:
        lines.append(category_header(category, today))
        for priority in PRIORITY_LEVELS:
            tasks = buckets.bucket(category, priority)
            lines.append(f"  {priority.value} ({len(tasks)})")
            for task in tasks:
                lines.append(f"    {_format_task(task)}")
    return "\n".join(lines)


def _render_goal(goal: Goal) -> list[str]:
    year = goal.target_date if goal.target_date is not None else "-"
    lines = [f"{_short_id(goal.id)} {goal.title} [{goal.status}, target {year}] {goal_progress(goal)}%"]
    if goal.description:
        lines.append(f"    {goal.description}")
    for m in goal.milestones:
        mark = "x" if m.is_completed else " "
        lines.append(f"    [{mark}] {_short_id(m.id)} {m.text}")
    return lines


# ---- lookup helpers ----


def _find_task(state: AppState, prefix: str) -> tuple[BucketKey, Task] | str:
    matches = [(key, t) for key, t in state.session.buckets.iter_tasks() if t.id.startswith(prefix)]
    if not matches:
        return f"No task matches id '{prefix}'."
    if len(matches) > 1:
        return f"Ambiguous id '{prefix}' ({len(matches)} tasks). Use more characters."
    return matches[0]


def _find_goal(state: AppState, prefix: str) -> Goal | str:
    matches = [g for g in state.session.snapshot.goals if g.id.startswith(prefix)]
    if not matches:
        return f"No goal matches id '{prefix}'."
    if len(matches) > 1:
        return f"Ambiguous goal id '{prefix}'. Use more characters."
    return matches[0]


def _parse_goal_args(args: list[str]) -> tuple[int, str, str]:
    """<year> <title words> [| description words]"""
    if len(args) < 2:
        raise ValueError("expected <year> <title> [| description]")
    try:
        year = int(args[0])
    except ValueError:
        raise ValueError(f"target year must be a number, got {args[0]!r}") from None
    title, _, description = " ".join(args[1:]).partition("|")
    return year, title.strip(), description.strip()


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_board(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <today|week|month> <high|medium|low> <text...>"""
    if len(args) < 3:
        return "Usage: /add <today|week|month> <high|medium|low> <text>"
    category = TimeCategory.parse(args[0])
    priority = Priority.parse(args[1])
    notice = state.session.dispatch(AddTask(category, priority, " ".join(args[2:])))
    return _ok(notice, f"Added to {category.value}/{priority.value}.")


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <task_id> <new text>"
    found = _find_task(state, args[0])
    if isinstance(found, str):
        return found
    (category, priority), task = found
    notice = state.session.dispatch(EditTask(category, priority, task.id, " ".join(args[1:])))
    return _ok(notice, "Task updated.")


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /del <task_id>"
    found = _find_task(state, args[0])
    if isinstance(found, str):
        return found
    (category, priority), task = found
    notice = state.session.dispatch(DeleteTask(category, priority, task.id))
    return _ok(notice, f"Deleted: {task.text}")


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <task_id>"
    found = _find_task(state, args[0])
    if isinstance(found, str):
        return found
    (category, priority), task = found
    notice = state.session.dispatch(ToggleTask(category, priority, task.id))
    status = "open" if task.is_completed else "done"
    return _ok(notice, f"Marked {status}: {task.text}")


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <task_id> <today|week|month> <high|medium|low>"""
    if len(args) != 3:
        return "Usage: /move <task_id> <today|week|month> <high|medium|low>"
    found = _find_task(state, args[0])
    if isinstance(found, str):
        return found
    source, task = found
    target = (TimeCategory.parse(args[1]), Priority.parse(args[2]))
    if source == target:
        return "Task is already there."
    notice = state.session.dispatch(MoveTask(task.id, source, target))
    return _ok(notice, f"Moved to {target[0].value}/{target[1].value}.")


def cmd_goals(state: AppState, args: list[str]) -> str:
    goals = state.session.snapshot.goals
    if not goals:
        return "No goals yet. Use /goal add <year> <title> [| description]."
    lines = ["Goals:"]
    for goal in goals:
        lines.extend(_render_goal(goal))
    return "\n".join(lines)


def cmd_goal(state: AppState, args: list[str]) -> str:
    """
    /goal add <year> <title> [| description]
    /goal edit <goal_id> <year> <title> [| description]
    /goal del <goal_id>
    """
    usage = (
        "Usage:\n"
        "  /goal add <year> <title> [| description]\n"
        "  /goal edit <goal_id> <year> <title> [| description]\n"
        "  /goal del <goal_id>"
    )
    if not args:
        return usage

    sub = args[0].lower()

    if sub == "add":
        year, title, description = _parse_goal_args(args[1:])
        notice = state.session.dispatch(AddGoal(title, description, year))
        return _ok(notice, f"Goal added: {title}")

    if sub == "edit" and len(args) >= 2:
        goal = _find_goal(state, args[1])
        if isinstance(goal, str):
            return goal
        year, title, description = _parse_goal_args(args[2:])
        notice = state.session.dispatch(EditGoal(goal.id, title, description, year))
        return _ok(notice, "Goal updated.")

    if sub in ("del", "delete") and len(args) == 2:
        goal = _find_goal(state, args[1])
        if isinstance(goal, str):
            return goal
        notice = state.session.dispatch(DeleteGoal(goal.id))
        return _ok(notice, f"Goal deleted: {goal.title}")

    return usage


def cmd_milestone(state: AppState, args: list[str]) -> str:
    """
    /ms add <goal_id> <text>
    /ms done <goal_id> <milestone_id>
    """
    usage = "Usage: /ms add <goal_id> <text> | /ms done <goal_id> <milestone_id>"
    if len(args) < 3:
        return usage

    goal = _find_goal(state, args[1])
    if isinstance(goal, str):
        return goal

    sub = args[0].lower()
    if sub == "add":
        notice = state.session.dispatch(AddMilestone(goal.id, " ".join(args[2:])))
        return _ok(notice, "Milestone added.")

    if sub == "done" and len(args) == 3:
        matches = [m for m in goal.milestones if m.id.startswith(args[2])]
        if len(matches) != 1:
            return f"No single milestone matches id '{args[2]}'."
        notice = state.session.dispatch(ToggleMilestone(goal.id, matches[0].id))
        return _ok(notice, "Milestone toggled.")

    return usage


def _timer_status(state: AppState) -> str:
    timer = state.session.timer
    running = "running" if timer.is_running else "paused"
    return (
        f"{timer.label} {format_time(timer.seconds_remaining)} ({running}), "
        f"progress {max(0.0, min(1.0, timer.progress)):.0%}, cycles: {timer.completed_cycles}"
    )


def cmd_timer(state: AppState, args: list[str]) -> str:
    """
    /timer          -> show status
    /timer start    -> start / resume
    /timer pause    -> pause
    /timer reset    -> back to a fresh focus interval, cycles cleared
    """
    sub = args[0].lower() if args else "status"
    if sub in ("start", "resume"):
        state.session.dispatch(StartTimer())
    elif sub in ("pause", "stop"):
        state.session.dispatch(PauseTimer())
    elif sub == "reset":
        state.session.dispatch(ResetTimer())
    elif sub != "status":
        return "Usage: /timer [start|pause|reset|status]"
    return _timer_status(state)


def cmd_breakdown(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if len(args) != 1:
        return "Usage: /breakdown <task_id>"
    found = _find_task(state, args[0])
    if isinstance(found, str):
        return found
    (category, priority), task = found

    if emit:
        with contextlib.suppress(Exception):
            emit(f"[AI] Breaking down: {task.text} ...")

    before = set(state.session.buckets.task_ids())
    notice = state.session.breakdown_task(category, priority, task.id)
    if notice is not None:
        return format_notice(notice) or ""
    if not set(state.session.buckets.task_ids()) - before:
        return "Task was changed or removed before the breakdown finished. Nothing changed."
    return f"Task broken down in {category.value}/{priority.value}."


def cmd_suggest(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("[AI] Suggesting tasks for this week ...")
    notice = state.session.suggest_weekly_tasks()
    return format_notice(notice) or "Suggested tasks added to This Week/Medium."


def cmd_review(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("[AI] Writing your weekly review ...")
    return format_notice(state.session.weekly_review()) or ""


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = state.session.stats()
    lines = [
        "Dashboard:",
        f"  Total: {s.total}  Completed: {s.completed}  Pending: {s.pending}  Rate: {s.completion_rate}%",
        "  By priority: " + ", ".join(f"{p.value} {n}" for p, n in s.by_priority.items()),
    ]
    for c in s.by_category:
        lines.append(f"  {c.category.value}: {c.completed}/{c.total} ({c.rate}%)")
    return "\n".join(lines)


def cmd_reset(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() != "yes":
        return "This will erase all your tasks and goals. Type /reset yes to confirm."
    notice = state.session.dispatch(ResetAll())
    return _ok(notice, "All data reset.")


def cmd_status(state: AppState, args: list[str]) -> str:
    models = ", ".join(list(getattr(state.settings, "llm_models", []) or []))
    saving = "ON" if state.session.persistence_enabled else "OFF (in-memory only)"
    ai = "online" if state.llm_online else "offline demo"
    return (
        "Status:\n"
        f"  Day: {state.session.snapshot.last_visited_date}\n"
        f"  Saving: {saving}\n"
        f"  AI: {ai}; models (priority -> fallback): {models}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all buckets.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <today|week|month> <high|medium|low> <text>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <task_id> <text>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <task_id>.", aliases=["rm"])
registry.register("done", cmd_done, help_text="Toggle a task complete: /done <task_id>.")
registry.register("move", cmd_move, help_text="Move a task: /move <task_id> <category> <priority>.", aliases=["mv"])
registry.register("goals", cmd_goals, help_text="List goals with progress.")
registry.register("goal", cmd_goal, help_text="Goals: /goal add | edit | del.")
registry.register("ms", cmd_milestone, help_text="Milestones: /ms add <goal_id> <text> | /ms done <goal_id> <id>.")
registry.register("timer", cmd_timer, help_text="Focus timer: /timer start | pause | reset | status.")
registry.register("breakdown", cmd_breakdown, help_text="AI: split a task into sub-tasks.")
registry.register("suggest", cmd_suggest, help_text="AI: suggest weekly tasks from This Month/High.")
registry.register("review", cmd_review, help_text="AI: weekly review of completed tasks.")
registry.register("stats", cmd_stats, help_text="Dashboard statistics.")
registry.register("reset", cmd_reset, help_text="Erase all tasks and goals: /reset yes.")
registry.register("status", cmd_status, help_text="Show current settings (saving/AI/models).")
