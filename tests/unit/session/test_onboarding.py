# tests/unit/session/test_onboarding.py - v1
"""Tests for session/onboarding.py."""

from __future__ import annotations

import pytest

from jurados.session.onboarding import OnboardingTracker


class TestOnboardingTracker:
    @pytest.mark.asyncio
    async def test_shown_until_marked(self, preferences):
        tracker = OnboardingTracker(preferences)
        assert await tracker.should_show() is True
        await tracker.mark_seen()
        assert await tracker.should_show() is False

    @pytest.mark.asyncio
    async def test_persists(self, tmp_path):
        from jurados.preferences.json_store import JsonPreferencesStore

        await OnboardingTracker(JsonPreferencesStore(tmp_path)).mark_seen()
        assert await OnboardingTracker(JsonPreferencesStore(tmp_path)).should_show() is False
