# src/preferences/sqlite_store.py - v1
"""SQLite-based preferences store (PREFERENCES_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Values are stored as JSON so
booleans and strings round-trip with their type.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from jurados.preferences.base_preferences_store import BasePreferencesStore, PreferenceValue

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SqlitePreferencesStore(BasePreferencesStore):
    """SQLite-backed preferences store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> PreferenceValue | None:
        cursor = self._conn.execute("SELECT value FROM preferences WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt preference %s: %s", key, e)
            return None

    async def put(self, key: str, value: PreferenceValue) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO preferences (key, value) VALUES (?, ?)",
            (key, json.dumps(value)),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        self._conn.execute("DELETE FROM preferences WHERE key = ?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
