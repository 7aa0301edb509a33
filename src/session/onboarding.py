# src/session/onboarding.py - v1
"""One-time introductory walkthrough flag."""

from __future__ import annotations

from jurados.preferences.base_preferences_store import ONBOARDING_SEEN_KEY, BasePreferencesStore


class OnboardingTracker:
    def __init__(self, preferences: BasePreferencesStore) -> None:
        self._preferences = preferences

    async def should_show(self) -> bool:
        return not await self._preferences.get_bool(ONBOARDING_SEEN_KEY)

    async def mark_seen(self) -> None:
        await self._preferences.put(ONBOARDING_SEEN_KEY, True)
