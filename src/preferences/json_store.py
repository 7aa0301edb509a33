# src/preferences/json_store.py - v1
"""JSON file-based preferences store (default PREFERENCES_BACKEND=json).

All keys live in one ``preferences.json`` file under PREFERENCES_ROOT,
rewritten atomically on every change.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from jurados.preferences.base_preferences_store import BasePreferencesStore, PreferenceValue

logger = logging.getLogger(__name__)

_FILE_NAME = "preferences.json"


class JsonPreferencesStore(BasePreferencesStore):
    """File-based preferences store using a single JSON document."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._path = self._root / _FILE_NAME

    async def get(self, key: str) -> PreferenceValue | None:
        return self._load().get(key)

    async def put(self, key: str, value: PreferenceValue) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    async def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Ignoring corrupt preferences file %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self._path)
