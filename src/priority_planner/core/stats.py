# src/priority_planner/core/stats.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .buckets import BucketStore
from .goals import percent
from .models import PRIORITY_LEVELS, TIME_CATEGORIES, Priority, TimeCategory

_WEEKDAYS_LONG = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS_LONG = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, slots=True)
class CategoryStats:
    category: TimeCategory
    total: int
    completed: int
    rate: int


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total: int
    completed: int
    pending: int
    completion_rate: int
    by_priority: dict[Priority, int]
    by_category: tuple[CategoryStats, ...]


def dashboard_stats(store: BucketStore) -> DashboardStats:
    total = 0
    completed = 0
    by_priority = {p: 0 for p in PRIORITY_LEVELS}
    by_category: list[CategoryStats] = []

    for category in TIME_CATEGORIES:
        cat_total = 0
        cat_done = 0
        for priority in PRIORITY_LEVELS:
            tasks = store.bucket(category, priority)
            done = sum(1 for t in tasks if t.is_completed)
            by_priority[priority] += len(tasks)
            cat_total += len(tasks)
            cat_done += done
        total += cat_total
        completed += cat_done
        by_category.append(CategoryStats(category, cat_total, cat_done, percent(cat_done, cat_total)))

    return DashboardStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=percent(completed, total),
        by_priority=by_priority,
        by_category=tuple(by_category),
    )


def _short(d: date) -> str:
    return f"{_MONTHS_LONG[d.month - 1][:3]} {d.day}"


def category_header(category: TimeCategory, today: date) -> str:
    """Section title shown above a time horizon."""
    if category == TimeCategory.TODAY:
        return f"Today • {_WEEKDAYS_LONG[today.weekday()]}, {_MONTHS_LONG[today.month - 1]} {today.day}"

    if category == TimeCategory.THIS_WEEK:
        # Week starts on the previous Sunday; a Sunday starts 7 days back.
        days_since_sunday = (today.weekday() + 1) % 7 or 7
        start = today - timedelta(days=days_since_sunday)
        end = start + timedelta(days=6)
        return f"This Week • {_short(start)} - {end.day}"

    return f"This Month • {_MONTHS_LONG[today.month - 1]}"


def format_task_timestamp(iso: str | None) -> str:
    if not iso:
        return ""
    try:
        created = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return ""
    return f"Added: {_short(created)}"
