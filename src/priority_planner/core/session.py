# src/priority_planner/core/session.py

"""
Planner session: the single owner of PlannerState.

Lifecycle:
- open(): load the snapshot, reconcile it against today, stamp the visit date, save.
- dispatch(): apply one command; save when the snapshot changed.
- breakdown/suggest/review: call the transform gateway outside the lock, then
  apply the result against the current state in one step.

Single-writer: every state replacement happens under self._lock.
Gateway failures become ShowError notices; they never escape.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date

from .buckets import BucketStore
from .commands import (
    TIMER_COMMANDS,
    Command,
    Notice,
    PlannerState,
    ShowError,
    ShowInfo,
    ShowReview,
    Tick,
    apply_command,
)
from .errors import GatewayUnavailable, TransformFailure
from .models import Priority, TimeCategory, new_task
from .ports import Clock, SnapshotRepo, TaskTransformer
from .reassign import replace_with_breakdown
from .rollover import reconcile
from .snapshot import Snapshot
from .stats import DashboardStats, dashboard_stats
from .timer import FocusTimer, TimerMode

logger = logging.getLogger(__name__)

SUGGEST_KEY = "feature:suggest"
REVIEW_KEY = "feature:review"


class PlannerSession:
    def __init__(
        self,
        repo: SnapshotRepo,
        transformer: TaskTransformer,
        *,
        clock: Clock = date.today,
    ) -> None:
        self._repo = repo
        self._transformer = transformer
        self._clock = clock
        self._lock = threading.RLock()
        self._state = PlannerState()
        self._opened = False
        self._persist = False
        self._busy: set[str] = set()

    # ---- read-only views ----

    @property
    def state(self) -> PlannerState:
        return self._state

    @property
    def snapshot(self) -> Snapshot:
        return self._state.snapshot

    @property
    def buckets(self) -> BucketStore:
        return self._state.snapshot.buckets

    @property
    def timer(self) -> FocusTimer:
        return self._state.timer

    @property
    def is_open(self) -> bool:
        return self._opened

    @property
    def persistence_enabled(self) -> bool:
        return self._persist

    def is_busy(self, task_id: str) -> bool:
        with self._lock:
            return task_id in self._busy

    def stats(self) -> DashboardStats:
        return dashboard_stats(self.buckets)

    # ---- lifecycle ----

    def open(self, today: date | None = None) -> Notice | None:
        """
        Rehydrate and reconcile the stored snapshot. Must run before any mutation.

        If loading fails the session still opens, empty and in-memory only:
        nothing is written back, so an unreadable document is never overwritten.
        """
        today = today or self._clock()

        try:
            raw = self._repo.load()
        except GatewayUnavailable as e:
            logger.warning("Snapshot load failed, running in-memory only: %s", e)
            with self._lock:
                self._state = replace(self._state, snapshot=Snapshot())
                self._opened = True
                self._persist = False
            return ShowError(f"Could not load your data ({e}). Changes will not be saved this session.")

        if raw is None:
            logger.info("No stored planner data found, starting fresh.")
            snapshot = Snapshot()
        else:
            snapshot = Snapshot.from_dict(raw)

        buckets, day = reconcile(snapshot.buckets, snapshot.last_visited_date, today)
        snapshot = replace(snapshot, buckets=buckets, last_visited_date=day)

        with self._lock:
            self._state = replace(self._state, snapshot=snapshot)
            self._opened = True
            self._persist = True
            logger.info(
                "Session opened day=%s tasks=%d goals=%d",
                day,
                snapshot.buckets.count(),
                len(snapshot.goals),
            )
            return self._save_locked()

    def _require_open(self) -> None:
        if not self._opened:
            raise RuntimeError("Planner session is not open; call open() first.")

    def _save_locked(self) -> Notice | None:
        if not self._persist:
            logger.debug("Persistence disabled for this session; skipping save.")
            return None
        try:
            self._repo.save(self._state.snapshot.to_dict())
        except GatewayUnavailable as e:
            logger.warning("Snapshot save failed: %s", e)
            return ShowError(f"Failed to save data: {e}")
        return None

    def _set_buckets_and_save(self, buckets: BucketStore) -> Notice | None:
        with self._lock:
            if buckets is self._state.snapshot.buckets:
                return None
            self._state = replace(self._state, snapshot=replace(self._state.snapshot, buckets=buckets))
            return self._save_locked()

    # ---- commands ----

    def dispatch(self, command: Command) -> Notice | None:
        """
        Apply one command.

        Stale ids are silent no-ops. Invalid input (blank text, duplicate id)
        raises ValueError and leaves the state untouched.
        """
        with self._lock:
            if not isinstance(command, TIMER_COMMANDS):
                self._require_open()

            before = self._state
            after = apply_command(before, command)
            self._state = after

            if after.snapshot is before.snapshot:
                return None
            logger.debug("Applied %s", type(command).__name__)
            return self._save_locked()

    def tick(self) -> Notice | None:
        """Feed one timer tick. Returns a ShowInfo when an interval completes."""
        with self._lock:
            before = self._state.timer
            self.dispatch(Tick())
            after = self._state.timer

        if after.mode == before.mode:
            return None

        if before.mode == TimerMode.POMODORO:
            logger.info("Focus interval complete cycles=%d next=%s", after.completed_cycles, after.mode.value)
            return ShowInfo(f"Focus interval complete (cycle {after.completed_cycles}). Time for a {after.label}.")

        logger.info("Break complete (%s)", before.mode.value)
        return ShowInfo("Break is over. Ready to focus?")

    # ---- transform gateway ----

    def _claim(self, key: str) -> bool:
        with self._lock:
            if key in self._busy:
                return False
            self._busy.add(key)
            return True

    def _release(self, key: str) -> None:
        with self._lock:
            self._busy.discard(key)

    def breakdown_task(self, category: TimeCategory, priority: Priority, task_id: str) -> Notice | None:
        """Replace a task with the sub-tasks proposed by the transformer."""
        with self._lock:
            self._require_open()
            task = self._state.snapshot.buckets.get(category, priority, task_id)
        if task is None:
            return None

        if not self._claim(task_id):
            return ShowInfo("This task is already being broken down.")

        try:
            try:
                fragments = self._transformer.breakdown(task.text)
            except TransformFailure as e:
                logger.warning("Breakdown failed task_id=%s: %s", task_id, e)
                return ShowError(str(e))

            with self._lock:
                buckets = replace_with_breakdown(
                    self._state.snapshot.buckets, task_id, (category, priority), fragments
                )
                logger.info("Breakdown task_id=%s -> %d sub-tasks", task_id, len(fragments))
                return self._set_buckets_and_save(buckets)
        finally:
            self._release(task_id)

    def suggest_weekly_tasks(self) -> Notice | None:
        """Append suggested tasks to This Week/Medium, based on This Month/High."""
        with self._lock:
            self._require_open()
            monthly = self._state.snapshot.buckets.bucket(TimeCategory.THIS_MONTH, Priority.HIGH)
            source = ", ".join(t.text for t in monthly)

        if not source:
            return ShowInfo("Add high-priority tasks to 'This Month' to get suggestions.")

        if not self._claim(SUGGEST_KEY):
            return ShowInfo("Suggestions are already being generated.")

        try:
            try:
                texts = self._transformer.suggest(source)
            except TransformFailure as e:
                logger.warning("Suggest failed: %s", e)
                return ShowError(str(e))

            suggested = [new_task(text) for text in texts if text and text.strip()]
            with self._lock:
                buckets = self._state.snapshot.buckets.append_tasks(
                    TimeCategory.THIS_WEEK, Priority.MEDIUM, suggested
                )
                logger.info("Suggested %d weekly tasks", len(suggested))
                return self._set_buckets_and_save(buckets)
        finally:
            self._release(SUGGEST_KEY)

    def weekly_review(self) -> Notice:
        """Narrative summary of completed Today and This Week tasks."""
        with self._lock:
            self._require_open()
            buckets = self._state.snapshot.buckets
            done = [
                t.text
                for t in (*buckets.category_tasks(TimeCategory.TODAY), *buckets.category_tasks(TimeCategory.THIS_WEEK))
                if t.is_completed
            ]

        if not done:
            return ShowInfo("Complete some tasks in 'Today' or 'This Week' to get a review.")

        if not self._claim(REVIEW_KEY):
            return ShowInfo("A review is already being written.")

        try:
            content = self._transformer.review("; ".join(done))
        except TransformFailure as e:
            logger.warning("Weekly review failed: %s", e)
            return ShowError(str(e))
        finally:
            self._release(REVIEW_KEY)

        return ShowReview(content)
