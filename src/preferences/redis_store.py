# src/preferences/redis_store.py - v1
"""Redis-based preferences store (PREFERENCES_BACKEND=redis).

Requires 'redis' package: pip install redis.
Lets several app processes of the same user share the cached profile id.
"""

from __future__ import annotations

import json
import logging

from jurados.preferences.base_preferences_store import BasePreferencesStore, PreferenceValue

logger = logging.getLogger(__name__)

_KEY_PREFIX = "jurados:prefs:"


class RedisPreferencesStore(BasePreferencesStore):
    """Redis-backed preferences store."""

    def __init__(self, redis_url: str, namespace: str = "") -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._prefix = f"{_KEY_PREFIX}{namespace}:" if namespace else _KEY_PREFIX

    async def get(self, key: str) -> PreferenceValue | None:
        data = self._client.get(f"{self._prefix}{key}")
        if data is None:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt preference %s: %s", key, e)
            return None

    async def put(self, key: str, value: PreferenceValue) -> None:
        self._client.set(f"{self._prefix}{key}", json.dumps(value))

    async def delete(self, key: str) -> None:
        self._client.delete(f"{self._prefix}{key}")

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
