# src/priority_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session depends on Protocols instead of concrete implementations,
so persistence and the LLM provider stay swappable and tests can use fakes.
"""

from datetime import date
from typing import Any, Callable, Iterable, Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.

Clock = Callable[[], date]


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI/OpenRouter-compatible)."""
    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]: ...


class SnapshotRepo(Protocol):
    """
    Persistence gateway for the whole session document.

    Both methods raise GatewayUnavailable on failure.
    """

    def load(self) -> dict[str, Any] | None: ...
    def save(self, data: dict[str, Any]) -> None: ...


class TaskTransformer(Protocol):
    """Text-generation gateway. Every method raises TransformFailure instead of returning junk."""

    def breakdown(self, task_text: str) -> list[str]: ...
    def suggest(self, source_text: str) -> list[str]: ...
    def review(self, completed_text: str) -> str: ...
