# src/priority_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import LLMClient, SnapshotRepo
from .session import PlannerSession


@dataclass
class AppState:
    # Settings are kept on the state so connectors and commands can read them.
    settings: Any

    llm: LLMClient
    snapshot_repo: SnapshotRepo
    session: PlannerSession

    llm_online: bool = False
