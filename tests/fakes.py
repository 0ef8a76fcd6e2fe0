# tests/fakes.py

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from priority_planner.core.errors import GatewayUnavailable, TransformFailure
from priority_planner.core.models import Task
from priority_planner.core.ports import ChatMessage

MONDAY = date(2026, 10, 19)


def make_task(task_id: str, text: str | None = None, *, done: bool = False) -> Task:
    return Task(id=task_id, text=text or task_id, is_completed=done, created_at="2026-10-18T09:00:00Z")


class FakeLLMClient:
    """
    Deterministic LLM client for unit tests.

    - Captures calls for assertions
    - Yields a predefined text as a single chunk (or raises `error`)
    """

    def __init__(self, next_text: str = "ok", error: Exception | None = None) -> None:
        self.next_text = next_text
        self.error = error
        self.calls: list[tuple[list[ChatMessage], str]] = []

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        self.calls.append((messages, system_prompt))
        if self.error is not None:
            raise self.error
        yield self.next_text


class FakeSnapshotRepo:
    """In-memory persistence gateway with switchable failures."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data = copy.deepcopy(data)
        self.saves: list[dict[str, Any]] = []
        self.fail_load = False
        self.fail_save = False

    def load(self) -> dict[str, Any] | None:
        if self.fail_load:
            raise GatewayUnavailable("load refused")
        return copy.deepcopy(self.data)

    def save(self, data: dict[str, Any]) -> None:
        if self.fail_save:
            raise GatewayUnavailable("save refused")
        merged = dict(self.data or {})
        merged.update(copy.deepcopy(data))
        self.data = merged
        self.saves.append(copy.deepcopy(data))


class FakeTransformer:
    """
    Task-transform gateway returning canned results.

    `on_call` runs inside each call before returning, which lets tests
    interleave other session operations with an in-flight request.
    """

    def __init__(
        self,
        *,
        subtasks: list[str] | None = None,
        weekly: list[str] | None = None,
        review_text: str = "Great week.",
        fail: bool = False,
    ) -> None:
        self.subtasks = subtasks if subtasks is not None else ["step one", "step two"]
        self.weekly = weekly if weekly is not None else ["weekly a", "weekly b"]
        self.review_text = review_text
        self.fail = fail
        self.on_call: Callable[[], None] | None = None
        self.calls: list[tuple[str, str]] = []

    def _enter(self, kind: str, text: str) -> None:
        self.calls.append((kind, text))
        if self.on_call is not None:
            self.on_call()
        if self.fail:
            raise TransformFailure("AI returned invalid data.")

    def breakdown(self, task_text: str) -> list[str]:
        self._enter("breakdown", task_text)
        return list(self.subtasks)

    def suggest(self, source_text: str) -> list[str]:
        self._enter("suggest", source_text)
        return list(self.weekly)

    def review(self, completed_text: str) -> str:
        self._enter("review", completed_text)
        return self.review_text
