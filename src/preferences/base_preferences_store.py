# src/preferences/base_preferences_store.py - v1
"""Abstract durable key-value store for local app preferences.

Holds a handful of scalar values that must survive restarts: the cached
profile record id and the onboarding flag. No schema versioning.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

PreferenceValue = str | bool | int | float

# Well-known keys.
PROFILE_ID_KEY = "user_profile_id"
ONBOARDING_SEEN_KEY = "has_seen_onboarding"


class BasePreferencesStore(ABC):
    """Unified interface for preferences backends."""

    @abstractmethod
    async def get(self, key: str) -> PreferenceValue | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def put(self, key: str, value: PreferenceValue) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    async def get_string(self, key: str) -> str | None:
        value = await self.get(key)
        return value if isinstance(value, str) and value else None

    async def get_bool(self, key: str, default: bool = False) -> bool:
        value = await self.get(key)
        return value if isinstance(value, bool) else default
