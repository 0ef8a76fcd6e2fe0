# tests/test_commands.py

from __future__ import annotations

from datetime import date

from priority_planner.cli.commands import CommandRegistry, registry, render_board
from priority_planner.core.commands import DeleteTask
from priority_planner.core.models import Priority, TimeCategory


def _only_task(state):
    [(key, task)] = list(state.session.buckets.iter_tasks())
    return key, task


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_then_move_by_id_prefix(state) -> None:
    assert registry.handle(state, "/add today high call the bank") == "Added to Today/High."
    key, task = _only_task(state)
    assert key == (TimeCategory.TODAY, Priority.HIGH)
    assert task.text == "call the bank"

    reply = registry.handle(state, f"/mv {task.id[:8]} week low")
    assert reply == "Moved to This Week/Low."
    assert _only_task(state) == ((TimeCategory.THIS_WEEK, Priority.LOW), task)

    assert registry.handle(state, f"/move {task.id[:8]} week low") == "Task is already there."


def test_bad_input_is_reported_not_raised(state) -> None:
    assert (registry.handle(state, "/add someday high x") or "").startswith("Error:")
    assert (registry.handle(state, "/edit zzzz new text") or "").startswith("No task matches")
    assert (registry.handle(state, "/goal add soon Learn Go") or "").startswith("Error:")


def test_done_and_delete(state) -> None:
    registry.handle(state, "/add month medium tidy garage")
    _, task = _only_task(state)

    assert registry.handle(state, f"/done {task.id}") == "Marked done: tidy garage"
    assert _only_task(state)[1].is_completed is True

    assert registry.handle(state, f"/rm {task.id}") == "Deleted: tidy garage"
    assert state.session.buckets.count() == 0


def test_goal_and_milestone_commands(state) -> None:
    assert registry.handle(state, "/goal add 2027 Learn Go | build a CLI") == "Goal added: Learn Go"
    goal = state.session.snapshot.goals[0]
    assert (goal.title, goal.description, goal.target_date) == ("Learn Go", "build a CLI", 2027)

    registry.handle(state, f"/ms add {goal.id[:8]} read the tour")
    registry.handle(state, f"/ms add {goal.id[:8]} write a tool")
    ms = state.session.snapshot.goals[0].milestones[0]
    registry.handle(state, f"/ms done {goal.id[:8]} {ms.id[:8]}")

    listing = registry.handle(state, "/goals") or ""
    assert "Learn Go" in listing
    assert "50%" in listing


def test_reset_requires_confirmation(state) -> None:
    registry.handle(state, "/add today low x")
    assert "/reset yes" in (registry.handle(state, "/reset") or "")
    assert state.session.buckets.count() == 1
    assert registry.handle(state, "/reset yes") == "All data reset."
    assert state.session.buckets.count() == 0


def test_ai_commands_emit_progress_and_apply(state) -> None:
    registry.handle(state, "/add month high learn piano")
    notes: list[str] = []

    reply = registry.handle(state, "/suggest", emit=notes.append)

    assert reply == "Suggested tasks added to This Week/Medium."
    assert notes and notes[0].startswith("[AI]")
    texts = [t.text for t in state.session.buckets.bucket(TimeCategory.THIS_WEEK, Priority.MEDIUM)]
    assert texts == ["weekly a", "weekly b"]

    assert registry.handle(state, "/review") == (
        "[INFO] Complete some tasks in 'Today' or 'This Week' to get a review."
    )


def test_timer_and_stats(state) -> None:
    assert (registry.handle(state, "/timer start") or "").startswith("Focus 25:00 (running)")
    assert "paused" in (registry.handle(state, "/timer pause") or "")

    registry.handle(state, "/add today high a")
    assert "Total: 1  Completed: 0  Pending: 1  Rate: 0%" in (registry.handle(state, "/stats") or "")


def test_render_board_shows_headers_and_counts(state) -> None:
    registry.handle(state, "/add week medium plan meals")
    board = render_board(state, today=date(2026, 10, 19))
    assert "Today • Monday, October 19" in board
    assert "This Week • Oct 18 - 24" in board
    assert "  Medium (1)" in board
    assert "plan meals" in board


def test_breakdown_reports_success(state) -> None:
    registry.handle(state, "/add week high plan trip")
    _, task = _only_task(state)

    assert registry.handle(state, f"/breakdown {task.id[:8]}") == "Task broken down in This Week/High."


def test_breakdown_of_a_task_deleted_meanwhile_says_nothing_changed(state, transformer) -> None:
    registry.handle(state, "/add week high plan trip")
    registry.handle(state, "/add week high keep me")
    task = state.session.buckets.bucket(TimeCategory.THIS_WEEK, Priority.HIGH)[0]
    transformer.on_call = lambda: state.session.dispatch(
        DeleteTask(TimeCategory.THIS_WEEK, Priority.HIGH, task.id)
    )

    reply = registry.handle(state, f"/breakdown {task.id}")

    assert reply == "Task was changed or removed before the breakdown finished. Nothing changed."
    assert [t.text for t in state.session.buckets.bucket(TimeCategory.THIS_WEEK, Priority.HIGH)] == ["keep me"]
