# src/priority_planner/storage/snapshot_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from ..core.errors import GatewayUnavailable

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    SQLite persistence gateway for the planner document.

    One row per document id, body stored as JSON. save() is a merge-style
    upsert: top-level keys in the new data replace stored ones, other stored
    keys are kept.

    The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "planner.sqlite3", *, document_id: str = "appData") -> None:
        self._db_path = Path(db_path)
        self._document_id = document_id
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise GatewayUnavailable(f"cannot open snapshot store at {self._db_path}: {e}") from e
        logger.info("SnapshotStore ready db=%s document=%s", self._db_path, self._document_id)

    @property
    def document_id(self) -> str:
        return self._document_id

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    body TEXT NOT NULL DEFAULT '{}',
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )

            cur.execute("PRAGMA table_info(documents)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE documents ADD COLUMN {name} {decl}")
                logger.info("SnapshotStore migration: added column %s", name)

            add_col("body", "TEXT NOT NULL DEFAULT '{}'")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    def _read_body(self, conn: sqlite3.Connection) -> dict[str, Any] | None:
        row = conn.execute("SELECT body FROM documents WHERE id = ?", (self._document_id,)).fetchone()
        if row is None:
            return None
        data = json.loads(row["body"] or "{}")
        if not isinstance(data, dict):
            raise ValueError("stored document is not a JSON object")
        return data

    # ---- public API ----

    def load(self) -> dict[str, Any] | None:
        try:
            conn = self._get_conn()
            try:
                data = self._read_body(conn)
            finally:
                conn.close()
        except (sqlite3.Error, ValueError) as e:
            logger.exception("Snapshot load failed document=%s", self._document_id)
            raise GatewayUnavailable(f"load failed: {e}") from e

        logger.debug("Snapshot loaded document=%s found=%s", self._document_id, data is not None)
        return data

    def save(self, data: dict[str, Any]) -> None:
        try:
            conn = self._get_conn()
            try:
                stored = self._read_body(conn) or {}
                stored.update(data)
                body = json.dumps(stored, ensure_ascii=False)
                conn.execute(
                    """
                    INSERT INTO documents(id, body, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET body = excluded.body, updated_at = excluded.updated_at
                    """,
                    (self._document_id, body, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, ValueError, TypeError) as e:
            logger.exception("Snapshot save failed document=%s", self._document_id)
            raise GatewayUnavailable(f"save failed: {e}") from e

        logger.debug("Snapshot saved document=%s bytes=%d", self._document_id, len(body))

    def delete(self) -> None:
        """Drop the stored document (used by tests and manual cleanup)."""
        try:
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM documents WHERE id = ?", (self._document_id,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise GatewayUnavailable(f"delete failed: {e}") from e
