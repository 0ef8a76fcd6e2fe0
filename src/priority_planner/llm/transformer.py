# src/priority_planner/llm/transformer.py

"""
Task-transform gateway backed by a chat LLM.

Three operations:
- breakdown: split one task into sub-tasks        -> {"subtasks": [...]}
- suggest:   propose weekly tasks from monthly ones -> {"weekly_tasks": [...]}
- review:    short narrative of completed work     -> free text

Structured replies are parsed strictly: anything unusable raises TransformFailure,
so the caller never applies a partial result.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.errors import TransformFailure
from ..core.ports import LLMClient
from .client import collect_text, friendly_llm_error_message

logger = logging.getLogger(__name__)

BREAKDOWN_SYSTEM_PROMPT = """
You are a task breakdown module for a personal planner.

Split the user's task into 2-6 small, concrete, actionable sub-tasks.

Output format:
Return STRICT JSON only. No extra text. No Markdown.
{"subtasks": ["...", "..."]}
""".strip()

SUGGEST_SYSTEM_PROMPT = """
You are a weekly planning module for a personal planner.

Given the user's high-priority goals for this month, propose 3-4 tasks
that move them forward this week. Each task is one short imperative sentence.

Output format:
Return STRICT JSON only. No extra text. No Markdown.
{"weekly_tasks": ["...", "..."]}
""".strip()

REVIEW_SYSTEM_PROMPT = """
You are a weekly review module for a personal planner.

Given the tasks the user completed, write a short, encouraging summary of their
progress (2-4 sentences), then a motivational quote on its own line.

Format:
Summary text
Quote text
""".strip()


def _extract_json_object(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("{") and raw.endswith("}"):
        return raw
    first = raw.find("{")
    last = raw.rfind("}")
    if first != -1 and last != -1 and last > first:
        return raw[first : last + 1]
    return raw


def parse_string_list(raw: str, key: str) -> list[str]:
    """
    Parse {"<key>": [str, ...]} out of a model reply.

    Non-string items and blanks are dropped. Raises TransformFailure when
    the reply is not JSON, the key is missing, or nothing usable remains.
    """
    try:
        data: Any = json.loads(_extract_json_object(raw))
    except json.JSONDecodeError as e:
        logger.warning("AI reply is not valid JSON (key=%s): %r", key, raw[:200])
        raise TransformFailure("AI returned invalid data.") from e

    items = data.get(key) if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.warning("AI reply has no %r list: %r", key, raw[:200])
        raise TransformFailure("AI returned invalid data.")

    out = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    if not out:
        raise TransformFailure("AI returned no usable items.")
    return out


class LLMTaskTransformer:
    def __init__(self, llm: LLMClient) -> None:
        self._llm = llm

    def _ask(self, system_prompt: str, prompt: str) -> str:
        try:
            return collect_text(self._llm, [{"role": "user", "content": prompt}], system_prompt)
        except RuntimeError as e:
            raise TransformFailure(friendly_llm_error_message(e)) from e
        except Exception as e:
            logger.exception("LLM call crashed.")
            raise TransformFailure("AI request failed.") from e

    def breakdown(self, task_text: str) -> list[str]:
        raw = self._ask(BREAKDOWN_SYSTEM_PROMPT, f'Break down the task: "{task_text}" into smaller sub-tasks.')
        return parse_string_list(raw, "subtasks")

    def suggest(self, source_text: str) -> list[str]:
        raw = self._ask(
            SUGGEST_SYSTEM_PROMPT,
            f'Based on monthly goals: "{source_text}", suggest 3-4 tasks for this week.',
        )
        return parse_string_list(raw, "weekly_tasks")

    def review(self, completed_text: str) -> str:
        raw = self._ask(REVIEW_SYSTEM_PROMPT, f'Completed tasks: "{completed_text}".')
        text = raw.strip()
        if not text:
            raise TransformFailure("AI returned an empty review.")
        return text
