# src/priority_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (snapshot store, LLM, transformer, session).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LLMClient
from ..core.session import PlannerSession
from ..core.state import AppState
from ..llm.client import OpenRouterLLMClient
from ..llm.offline import OfflineLLMClient
from ..llm.transformer import LLMTaskTransformer
from ..storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.snapshot_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings. The session is not opened yet.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client: LLMClient
    llm_online = True
    try:
        llm_client = OpenRouterLLMClient(settings)
    except RuntimeError as e:
        # Fallback for demos / local runs without external services.
        logger.info("AI features offline: %s", e)
        llm_client = OfflineLLMClient()
        llm_online = False

    repo = SnapshotStore(settings.snapshot_db_path, document_id=settings.document_id)
    session = PlannerSession(repo, LLMTaskTransformer(llm_client))

    return AppState(
        settings=settings,
        llm=llm_client,
        snapshot_repo=repo,
        session=session,
        llm_online=llm_online,
    )
