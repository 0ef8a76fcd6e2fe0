# src/priority_planner/core/reassign.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .buckets import BucketStore
from .models import BucketKey, new_task

logger = logging.getLogger(__name__)


def move_task(store: BucketStore, task_id: str, source: BucketKey, target: BucketKey) -> BucketStore:
    """
    Relocate one task between buckets (drag and drop).

    The task record is kept as-is and appended to the end of the target.
    Same source and target is a no-op; so is a task that is no longer at
    source (stale drag state).
    """
    if source == target:
        return store

    task = store.get(source[0], source[1], task_id)
    if task is None:
        logger.debug("Move ignored: task %s not in %s/%s", task_id, source[0].value, source[1].value)
        return store

    store = store.delete_task(source[0], source[1], task_id)
    return store.append_tasks(target[0], target[1], [task])


def replace_with_breakdown(
    store: BucketStore,
    task_id: str,
    key: BucketKey,
    fragments: Iterable[str],
    *,
    created_at: str | None = None,
) -> BucketStore:
    """
    Replace a task with one fresh task per text fragment, in the same bucket.

    New tasks are appended, then the original is removed. Nothing changes if
    the original is gone or no usable fragment is given.
    """
    if store.get(key[0], key[1], task_id) is None:
        logger.debug("Breakdown ignored: task %s not in %s/%s", task_id, key[0].value, key[1].value)
        return store

    subtasks = [new_task(text, created_at=created_at) for text in fragments if text and text.strip()]
    if not subtasks:
        return store

    store = store.append_tasks(key[0], key[1], subtasks)
    return store.delete_task(key[0], key[1], task_id)
