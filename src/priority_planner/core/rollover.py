# src/priority_planner/core/rollover.py

"""
Date-boundary rollover.

reconcile() runs once per calendar day, when the stored visit date differs
from today. Steps always execute in this order:

1. daily   - incomplete Today tasks (High, Medium, Low order) are prepended to
             This Week/Medium; all Today buckets are cleared. Completed Today
             tasks are dropped. Original priority is not kept.
2. weekly  - Sunday only: incomplete This Week tasks that were not carried in
             step 1 are prepended to This Month/Medium; all This Week buckets
             are cleared (including what step 1 just carried).
3. monthly - 1st of the month only: all This Month buckets are cleared.
             Nothing is carried anywhere.
"""

from __future__ import annotations

import logging
from datetime import date

from .buckets import BucketStore
from .models import Priority, Task, TimeCategory

logger = logging.getLogger(__name__)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

SUNDAY = 6  # date.weekday()


def today_str(today: date) -> str:
    """Calendar-day key stored as lastVisitedDate, e.g. "Mon Oct 05 2026"."""
    return f"{_WEEKDAYS[today.weekday()]} {_MONTHS[today.month - 1]} {today.day:02d} {today.year}"


def _daily_step(store: BucketStore) -> tuple[BucketStore, list[Task]]:
    carried = [t for t in store.category_tasks(TimeCategory.TODAY) if not t.is_completed]
    store = store.clear_category(TimeCategory.TODAY)
    store = store.prepend_tasks(TimeCategory.THIS_WEEK, Priority.MEDIUM, carried)
    return store, carried


def _weekly_step(store: BucketStore, exclude_ids: set[str]) -> tuple[BucketStore, list[Task]]:
    carried = [
        t
        for t in store.category_tasks(TimeCategory.THIS_WEEK)
        if not t.is_completed and t.id not in exclude_ids
    ]
    store = store.clear_category(TimeCategory.THIS_WEEK)
    store = store.prepend_tasks(TimeCategory.THIS_MONTH, Priority.MEDIUM, carried)
    return store, carried


def _monthly_step(store: BucketStore) -> tuple[BucketStore, int]:
    dropped = len(store.category_tasks(TimeCategory.THIS_MONTH))
    return store.clear_category(TimeCategory.THIS_MONTH), dropped


def reconcile(store: BucketStore, last_visited_date: str | None, today: date) -> tuple[BucketStore, str]:
    """
    Reconcile a rehydrated store against today's date.

    Returns (store', today_str). The store is returned unchanged when it was
    already reconciled today, or when there is no previous visit date.
    """
    day = today_str(today)

    if not last_visited_date:
        logger.info("Rollover skipped: no previous visit date (today=%s)", day)
        return store, day

    if last_visited_date == day:
        logger.debug("Rollover skipped: already reconciled today (%s)", day)
        return store, day

    before = store.count()

    store, daily = _daily_step(store)
    carried_ids = {t.id for t in daily}

    weekly: list[Task] = []
    if today.weekday() == SUNDAY:
        store, weekly = _weekly_step(store, carried_ids)

    dropped_month = 0
    if today.day == 1:
        store, dropped_month = _monthly_step(store)

    logger.info(
        "Rollover %s -> %s: daily_carried=%d weekly_carried=%d month_dropped=%d tasks=%d->%d",
        last_visited_date,
        day,
        len(daily),
        len(weekly),
        dropped_month,
        before,
        store.count(),
    )
    return store, day
