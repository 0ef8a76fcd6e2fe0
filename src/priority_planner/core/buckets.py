# src/priority_planner/core/buckets.py

"""
Bucket store: the 3x3 grid of ordered task lists.

Every (TimeCategory, Priority) pair always exists, possibly empty.
The store is immutable: each mutation returns a new BucketStore and shares
untouched buckets with the previous one. Stale ids are silent no-ops.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from .models import PRIORITY_LEVELS, TIME_CATEGORIES, BucketKey, Priority, Task, TimeCategory, new_task

logger = logging.getLogger(__name__)

ALL_KEYS: tuple[BucketKey, ...] = tuple((c, p) for c in TIME_CATEGORIES for p in PRIORITY_LEVELS)


@dataclass(frozen=True, slots=True)
class BucketStore:
    buckets: Mapping[BucketKey, tuple[Task, ...]]

    @classmethod
    def empty(cls) -> BucketStore:
        return cls(MappingProxyType({key: () for key in ALL_KEYS}))

    # ---- queries ----

    def bucket(self, category: TimeCategory, priority: Priority) -> tuple[Task, ...]:
        return self.buckets[(category, priority)]

    def category_tasks(self, category: TimeCategory) -> list[Task]:
        """All tasks of one time horizon in High, Medium, Low order."""
        out: list[Task] = []
        for priority in PRIORITY_LEVELS:
            out.extend(self.buckets[(category, priority)])
        return out

    def iter_tasks(self) -> Iterator[tuple[BucketKey, Task]]:
        for key in ALL_KEYS:
            for task in self.buckets[key]:
                yield key, task

    def task_ids(self) -> list[str]:
        return [task.id for _, task in self.iter_tasks()]

    def find(self, task_id: str) -> tuple[BucketKey, Task] | None:
        for key, task in self.iter_tasks():
            if task.id == task_id:
                return key, task
        return None

    def get(self, category: TimeCategory, priority: Priority, task_id: str) -> Task | None:
        for task in self.buckets[(category, priority)]:
            if task.id == task_id:
                return task
        return None

    def count(self) -> int:
        return sum(len(tasks) for tasks in self.buckets.values())

    # ---- low-level helpers ----

    def with_buckets(self, changes: Mapping[BucketKey, Iterable[Task]]) -> BucketStore:
        """Return a copy with the given buckets replaced wholesale."""
        merged = dict(self.buckets)
        for key, tasks in changes.items():
            if key not in merged:
                raise KeyError(f"unknown bucket: {key!r}")
            merged[key] = tuple(tasks)
        return BucketStore(MappingProxyType(merged))

    def clear_category(self, category: TimeCategory) -> BucketStore:
        return self.with_buckets({(category, p): () for p in PRIORITY_LEVELS})

    def _check_new_ids(self, tasks: Iterable[Task]) -> list[Task]:
        existing = set(self.task_ids())
        out: list[Task] = []
        for task in tasks:
            if task.id in existing:
                raise ValueError(f"duplicate task id: {task.id}")
            existing.add(task.id)
            out.append(task)
        return out

    def _update_task(self, key: BucketKey, task_id: str, **changes: Any) -> BucketStore:
        tasks = self.buckets[key]
        for idx, task in enumerate(tasks):
            if task.id == task_id:
                updated = replace(task, **changes)
                return self.with_buckets({key: (*tasks[:idx], updated, *tasks[idx + 1 :])})
        logger.debug("Task %s not found in %s/%s; ignoring update", task_id, key[0].value, key[1].value)
        return self

    # ---- mutations ----

    def add_task(
        self,
        category: TimeCategory,
        priority: Priority,
        text: str,
        *,
        task_id: str | None = None,
        created_at: str | None = None,
    ) -> BucketStore:
        task = new_task(text, task_id=task_id, created_at=created_at)
        return self.append_tasks(category, priority, [task])

    def append_tasks(self, category: TimeCategory, priority: Priority, tasks: Iterable[Task]) -> BucketStore:
        """Push tasks to the end of a bucket. Ids must be new to the whole store."""
        fresh = self._check_new_ids(tasks)
        if not fresh:
            return self
        key = (category, priority)
        return self.with_buckets({key: (*self.buckets[key], *fresh)})

    def prepend_tasks(self, category: TimeCategory, priority: Priority, tasks: Iterable[Task]) -> BucketStore:
        """Insert tasks at the front of a bucket, keeping their relative order."""
        fresh = self._check_new_ids(tasks)
        if not fresh:
            return self
        key = (category, priority)
        return self.with_buckets({key: (*fresh, *self.buckets[key])})

    def edit_task(self, category: TimeCategory, priority: Priority, task_id: str, text: str) -> BucketStore:
        if not text or not text.strip():
            raise ValueError("task text is required")
        return self._update_task((category, priority), task_id, text=text.strip())

    def toggle_complete(self, category: TimeCategory, priority: Priority, task_id: str) -> BucketStore:
        task = self.get(category, priority, task_id)
        if task is None:
            return self
        return self._update_task((category, priority), task_id, is_completed=not task.is_completed)

    def delete_task(self, category: TimeCategory, priority: Priority, task_id: str) -> BucketStore:
        key = (category, priority)
        tasks = self.buckets[key]
        kept = tuple(t for t in tasks if t.id != task_id)
        if len(kept) == len(tasks):
            return self
        return self.with_buckets({key: kept})

    # ---- (de)serialization ----

    def to_dict(self) -> dict[str, dict[str, list[dict[str, Any]]]]:
        return {
            category.value: {
                priority.value: [t.to_dict() for t in self.buckets[(category, priority)]]
                for priority in PRIORITY_LEVELS
            }
            for category in TIME_CATEGORIES
        }

    @classmethod
    def from_dict(cls, raw: Any) -> BucketStore:
        """
        Rehydrate from the persisted shape.

        Missing buckets become empty, malformed tasks are skipped, and a task id
        seen twice keeps only its first occurrence.
        """
        if not isinstance(raw, dict):
            return cls.empty()

        seen: set[str] = set()
        buckets: dict[BucketKey, tuple[Task, ...]] = {}
        for category, priority in ALL_KEYS:
            section = raw.get(category.value)
            items = section.get(priority.value) if isinstance(section, dict) else None
            tasks: list[Task] = []
            for item in items if isinstance(items, list) else []:
                task = Task.from_dict(item)
                if task is None:
                    logger.warning("Skipping malformed task in %s/%s", category.value, priority.value)
                    continue
                if task.id in seen:
                    logger.warning("Dropping duplicate task id=%s in %s/%s", task.id, category.value, priority.value)
                    continue
                seen.add(task.id)
                tasks.append(task)
            buckets[(category, priority)] = tuple(tasks)
        return cls(MappingProxyType(buckets))
