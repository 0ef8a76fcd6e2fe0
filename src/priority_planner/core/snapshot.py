# src/priority_planner/core/snapshot.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .buckets import BucketStore
from .models import Goal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """The whole persisted session document."""

    buckets: BucketStore = field(default_factory=BucketStore.empty)
    goals: tuple[Goal, ...] = ()
    last_visited_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": self.buckets.to_dict(),
            "goals": [g.to_dict() for g in self.goals],
            "lastVisitedDate": self.last_visited_date,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Snapshot:
        if not isinstance(raw, dict):
            return cls()

        goals: list[Goal] = []
        seen: set[str] = set()
        items = raw.get("goals")
        if items is not None and not isinstance(items, list):
            logger.warning("Ignoring malformed goals section (%s)", type(items).__name__)
            items = None
        for item in items or []:
            goal = Goal.from_dict(item)
            if goal is None or goal.id in seen:
                logger.warning("Skipping malformed or duplicate goal entry")
                continue
            seen.add(goal.id)
            goals.append(goal)

        last = raw.get("lastVisitedDate")
        return cls(
            buckets=BucketStore.from_dict(raw.get("tasks")),
            goals=tuple(goals),
            last_visited_date=last if isinstance(last, str) and last else None,
        )
