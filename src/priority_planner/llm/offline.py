# src/priority_planner/llm/offline.py

from __future__ import annotations

from collections.abc import Iterable

from ..core.ports import ChatMessage


class OfflineLLMClient:
    """
    Offline deterministic LLM client used when no external API is configured.

    Behavior:
    - Breakdown / weekly suggestion prompts -> empty JSON lists (surfaced as "no usable items")
    - Review prompts -> a fixed demo summary that echoes the completed tasks
    """

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        sp = (system_prompt or "").lower()

        if "task breakdown module" in sp:
            yield '{"subtasks": []}'
            return

        if "weekly planning module" in sp:
            yield '{"weekly_tasks": []}'
            return

        user_text = ""
        for m in reversed(messages):
            if m["role"] == "user":
                user_text = m["content"]
                break

        yield (
            "Offline demo mode: no external AI is configured.\n"
            "Set PRIORITY_OPENROUTER_API_KEY (and PRIORITY_LLM_MODELS) to enable real reviews.\n\n"
            f"{user_text}\n"
            "Small steps every day add up."
        )
