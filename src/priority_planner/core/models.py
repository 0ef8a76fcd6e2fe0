# src/priority_planner/core/models.py

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TimeCategory(StrEnum):
    """Time horizon of a task. Values are the persisted bucket keys."""

    TODAY = "Today"
    THIS_WEEK = "This Week"
    THIS_MONTH = "This Month"

    @classmethod
    def parse(cls, raw: str) -> TimeCategory:
        """Accept the stored value or a loose spelling ("today", "week", "this-month")."""
        key = "".join(ch for ch in str(raw).lower() if ch.isalnum())
        aliases = {
            "today": cls.TODAY,
            "day": cls.TODAY,
            "thisweek": cls.THIS_WEEK,
            "week": cls.THIS_WEEK,
            "thismonth": cls.THIS_MONTH,
            "month": cls.THIS_MONTH,
        }
        try:
            return aliases[key]
        except KeyError:
            raise ValueError(f"unknown time category: {raw!r}") from None


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, raw: str) -> Priority:
        key = str(raw).strip().lower()
        aliases = {
            "high": cls.HIGH,
            "h": cls.HIGH,
            "medium": cls.MEDIUM,
            "med": cls.MEDIUM,
            "m": cls.MEDIUM,
            "low": cls.LOW,
            "l": cls.LOW,
        }
        try:
            return aliases[key]
        except KeyError:
            raise ValueError(f"unknown priority: {raw!r}") from None


TIME_CATEGORIES: tuple[TimeCategory, ...] = (TimeCategory.TODAY, TimeCategory.THIS_WEEK, TimeCategory.THIS_MONTH)
PRIORITY_LEVELS: tuple[Priority, ...] = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)

BucketKey = tuple[TimeCategory, Priority]

GOAL_STATUS_IN_PROGRESS = "In Progress"


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    is_completed: bool = False
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task | None:
        if not isinstance(raw, dict):
            return None
        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id:
            return None
        return cls(
            id=task_id,
            text=str(raw.get("text") or ""),
            is_completed=raw.get("isCompleted") is True,
            created_at=str(raw.get("createdAt") or ""),
        )


def new_task(text: str, *, task_id: str | None = None, created_at: str | None = None) -> Task:
    """Mint a fresh incomplete task. Blank text is a caller error."""
    if not text or not text.strip():
        raise ValueError("task text is required")
    return Task(
        id=task_id or new_id(),
        text=text.strip(),
        is_completed=False,
        created_at=created_at or utc_now_iso(),
    )


@dataclass(frozen=True, slots=True)
class Milestone:
    id: str
    text: str
    is_completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "isCompleted": self.is_completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Milestone | None:
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
            return None
        return cls(id=raw["id"], text=str(raw.get("text") or ""), is_completed=raw.get("isCompleted") is True)


@dataclass(frozen=True, slots=True)
class Goal:
    """
    Long-term goal owning an ordered list of milestones.

    Notes:
    - target_date has year granularity.
    - status is stored but nothing transitions it away from "In Progress".
    - progress is derived (see goals.goal_progress), never stored.
    """

    id: str
    title: str
    description: str = ""
    target_date: int | None = None
    status: str = GOAL_STATUS_IN_PROGRESS
    milestones: tuple[Milestone, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "targetDate": self.target_date,
            "status": self.status,
            "milestones": [m.to_dict() for m in self.milestones],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Goal | None:
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
            return None

        milestones: list[Milestone] = []
        seen: set[str] = set()
        items = raw.get("milestones")
        if items is not None and not isinstance(items, list):
            logger.warning("Ignoring malformed milestones of goal id=%s", raw["id"])
            items = None
        for item in items or []:
            m = Milestone.from_dict(item)
            if m is None or m.id in seen:
                continue
            seen.add(m.id)
            milestones.append(m)

        return cls(
            id=raw["id"],
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            target_date=_parse_year(raw.get("targetDate")),
            status=str(raw.get("status") or GOAL_STATUS_IN_PROGRESS),
            milestones=tuple(milestones),
        )


def _parse_year(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(str(raw).strip()[:4])
    except ValueError:
        logger.warning("Ignoring malformed goal targetDate=%r", raw)
        return None
