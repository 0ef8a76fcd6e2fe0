# src/priority_planner/core/goals.py

"""
Goal tracker.

Goals are kept as an ordered tuple; every operation returns a new tuple.
Unknown goal or milestone ids are silent no-ops.
"""

from __future__ import annotations

from dataclasses import replace

from .models import GOAL_STATUS_IN_PROGRESS, Goal, Milestone, new_id

Goals = tuple[Goal, ...]


def _check_title(title: str) -> str:
    if not title or not title.strip():
        raise ValueError("goal title is required")
    return title.strip()


def find_goal(goals: Goals, goal_id: str) -> Goal | None:
    for goal in goals:
        if goal.id == goal_id:
            return goal
    return None


def add_goal(
    goals: Goals,
    title: str,
    description: str = "",
    target_year: int | None = None,
    *,
    goal_id: str | None = None,
) -> Goals:
    goal_id = goal_id or new_id()
    if find_goal(goals, goal_id) is not None:
        raise ValueError(f"duplicate goal id: {goal_id}")
    goal = Goal(
        id=goal_id,
        title=_check_title(title),
        description=(description or "").strip(),
        target_date=target_year,
        status=GOAL_STATUS_IN_PROGRESS,
        milestones=(),
    )
    return (*goals, goal)


def update_goal(
    goals: Goals,
    goal_id: str,
    *,
    title: str | None = None,
    description: str | None = None,
    target_year: int | None = None,
) -> Goals:
    """Overwrite the given fields; milestones and status are kept."""
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = _check_title(title)
    if description is not None:
        changes["description"] = description.strip()
    if target_year is not None:
        changes["target_date"] = target_year
    if not changes or find_goal(goals, goal_id) is None:
        return goals
    return tuple(replace(g, **changes) if g.id == goal_id else g for g in goals)


def delete_goal(goals: Goals, goal_id: str) -> Goals:
    # Milestones are owned by the goal and go with it.
    kept = tuple(g for g in goals if g.id != goal_id)
    return goals if len(kept) == len(goals) else kept


def add_milestone(goals: Goals, goal_id: str, text: str, *, milestone_id: str | None = None) -> Goals:
    if not text or not text.strip():
        raise ValueError("milestone text is required")
    goal = find_goal(goals, goal_id)
    if goal is None:
        return goals

    milestone_id = milestone_id or new_id()
    if any(m.id == milestone_id for m in goal.milestones):
        raise ValueError(f"duplicate milestone id: {milestone_id}")

    milestone = Milestone(id=milestone_id, text=text.strip(), is_completed=False)
    updated = replace(goal, milestones=(*goal.milestones, milestone))
    return tuple(updated if g.id == goal_id else g for g in goals)


def toggle_milestone(goals: Goals, goal_id: str, milestone_id: str) -> Goals:
    goal = find_goal(goals, goal_id)
    if goal is None or not any(m.id == milestone_id for m in goal.milestones):
        return goals

    milestones = tuple(
        replace(m, is_completed=not m.is_completed) if m.id == milestone_id else m for m in goal.milestones
    )
    updated = replace(goal, milestones=milestones)
    return tuple(updated if g.id == goal_id else g for g in goals)


def percent(done: int, total: int) -> int:
    """Integer percent rounded half up (0 when total is 0)."""
    if total <= 0:
        return 0
    return (done * 200 + total) // (2 * total)


def goal_progress(goal: Goal) -> int:
    done = sum(1 for m in goal.milestones if m.is_completed)
    return percent(done, len(goal.milestones))
