# tests/unit/profiles/test_profile_service.py - v1
"""Tests for profiles/service.py."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from factories import VALID_BIO, make_profile, make_user
from jurados.core import alerts
from jurados.core.errors import BatchSaveError, StoreAuthError
from jurados.core.models import (
    PROFILE_RECORD_TYPE,
    USER_PROFILE_KEY,
    USERS_RECORD_TYPE,
    Asset,
    ReferenceAction,
)
from jurados.core.outcomes import OutcomeStatus, ProfileAction
from jurados.preferences.base_preferences_store import PROFILE_ID_KEY
from jurados.profiles.service import ProfileService, draft_from_profile
from jurados.profiles.validation import ProfileDraft
from jurados.session.profile_cache import SessionCache
from jurados.store.memory_store import MemoryRecordStore


def _draft(**overrides) -> ProfileDraft:
    values = dict(full_name="  Ana Lopez ", profession="Designer", biography=VALID_BIO)
    values.update(overrides)
    return ProfileDraft(**values)


class TestSaveProfileValidation:
    @pytest.mark.asyncio
    async def test_invalid_draft_does_no_io(self, preferences):
        store = AsyncMock(spec=MemoryRecordStore)
        session = SessionCache(store, preferences)
        service = ProfileService(store, session)

        outcome = await service.save_profile(_draft(biography="x" * 89))

        assert outcome.status == OutcomeStatus.VALIDATION_FAILURE
        assert outcome.alert == alerts.INCOMPLETE_PROFILE
        assert outcome.errors == ["biography must be at least 90 characters"]
        assert store.mock_calls == []

    @pytest.mark.asyncio
    async def test_minimum_bio_accepted(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences))
        outcome = await service.save_profile(_draft(biography="x" * 90))
        assert outcome.ok


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_in_one_batch(self, store, preferences):
        store.save_records = AsyncMock(side_effect=store.save_records)
        store.save_record = AsyncMock(side_effect=store.save_record)
        session = SessionCache(store, preferences)
        service = ProfileService(store, session)

        outcome = await service.save_profile(_draft())

        assert outcome.ok
        assert outcome.action == ProfileAction.CREATED
        assert outcome.alert == alerts.PROFILE_CREATED
        store.save_record.assert_not_called()
        store.save_records.assert_awaited_once()
        batch = store.save_records.call_args.args[0]
        assert [r.record_type for r in batch] == [USERS_RECORD_TYPE, PROFILE_RECORD_TYPE]

        profile_id = outcome.profile.profile_id
        user = await store.fetch_record("local-user")
        reference = user.reference(USER_PROFILE_KEY)
        assert reference.record_id == profile_id
        assert reference.action == ReferenceAction.CASCADE

        saved = await store.fetch_record(profile_id)
        assert saved.text("full_name") == "Ana Lopez"
        assert await preferences.get_string(PROFILE_ID_KEY) == profile_id
        assert session.user_record.reference(USER_PROFILE_KEY).record_id == profile_id

    @pytest.mark.asyncio
    async def test_second_save_updates_same_profile(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences))
        created = await service.save_profile(_draft())
        updated = await service.save_profile(_draft(profession="Architect"))

        assert updated.action == ProfileAction.UPDATED
        assert updated.alert == alerts.PROFILE_UPDATED
        assert updated.profile.profile_id == created.profile.profile_id
        profiles = await store.query(PROFILE_RECORD_TYPE)
        assert len(profiles.records) == 1
        assert profiles.records[0].text("profession") == "Architect"

    @pytest.mark.asyncio
    async def test_failed_batch_leaves_everything_untouched(self, store, preferences):
        store.save_records = AsyncMock(side_effect=BatchSaveError("network down"))
        session = SessionCache(store, preferences)
        service = ProfileService(store, session)

        outcome = await service.save_profile(_draft())

        assert outcome.status == OutcomeStatus.STORE_FAILURE
        assert outcome.alert == alerts.ERROR_SAVING_PROFILE
        assert await preferences.get(PROFILE_ID_KEY) is None
        assert session.user_record.reference(USER_PROFILE_KEY) is None
        assert (await store.query(PROFILE_RECORD_TYPE)).records == []

    @pytest.mark.asyncio
    async def test_identity_fetch_failure(self, preferences):
        store = MemoryRecordStore()
        store.current_user_record_id = AsyncMock(side_effect=StoreAuthError("signed out"))
        service = ProfileService(store, SessionCache(store, preferences))

        outcome = await service.save_profile(_draft())
        assert outcome.alert == alerts.FAILED_TO_FETCH_USER_RECORD
        assert len(store) == 0


class TestUpdate:
    @pytest.mark.asyncio
    async def test_updates_existing(self, store_with_profile, preferences):
        service = ProfileService(store_with_profile, SessionCache(store_with_profile, preferences))
        outcome = await service.save_profile(_draft(full_name="Fernando J. Jurado"))

        assert outcome.action == ProfileAction.UPDATED
        assert outcome.profile.profile_id == "prof_1"
        record = await store_with_profile.fetch_record("prof_1")
        assert record.text("full_name") == "Fernando J. Jurado"

    @pytest.mark.asyncio
    async def test_update_keeps_presence(self, locations, preferences):
        from jurados.presence.state import present_location, set_presence

        store = MemoryRecordStore([
            *locations, make_user("prof_1"), set_presence(make_profile("prof_1"), "loc_centro"),
        ])
        service = ProfileService(store, SessionCache(store, preferences))
        await service.save_profile(_draft())

        record = await store.fetch_record("prof_1")
        assert present_location(record) == "loc_centro"


class TestAvatar:
    @pytest.mark.asyncio
    async def test_avatar_stored_as_jpeg(self, store, preferences, png_bytes):
        service = ProfileService(store, SessionCache(store, preferences), jpeg_quality=60)
        outcome = await service.save_profile(_draft(avatar_image=png_bytes))
        assert outcome.profile.has_avatar
        assert outcome.profile.avatar.data[:2] == b"\xff\xd8"

    @pytest.mark.asyncio
    async def test_unreadable_avatar_dropped(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences))
        outcome = await service.save_profile(_draft(avatar_image=b"garbage"))
        assert outcome.ok
        assert not outcome.profile.has_avatar


class TestLoadProfile:
    @pytest.mark.asyncio
    async def test_load(self, store_with_profile, preferences):
        service = ProfileService(store_with_profile, SessionCache(store_with_profile, preferences))
        outcome = await service.load_profile()
        assert outcome.ok
        assert outcome.profile.full_name == "Fernando Jurado"

    @pytest.mark.asyncio
    async def test_no_profile_yet(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences))
        outcome = await service.load_profile()
        assert outcome.status == OutcomeStatus.RESOLUTION_FAILURE
        assert outcome.alert is None

    @pytest.mark.asyncio
    async def test_stale_id(self, store, preferences):
        await preferences.put(PROFILE_ID_KEY, "gone")
        service = ProfileService(store, SessionCache(store, preferences))
        outcome = await service.load_profile()
        assert outcome.alert == alerts.PROFILE_UNAVAILABLE


class TestDraftFromProfile:
    def test_prefill(self):
        from jurados.core.models import Profile

        profile = Profile(
            profile_id="p1", full_name="Ana", profession="Chef", biography="Bio",
            avatar=Asset(data=b"jpg"),
        )
        draft = draft_from_profile(profile)
        assert draft.full_name == "Ana"
        assert draft.avatar_image == b"jpg"


class TestBiographyLimit:
    @pytest.mark.asyncio
    async def test_long_biography_clipped_on_save(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences), max_bio_length=120)
        outcome = await service.save_profile(_draft(biography="b" * 200))
        assert outcome.profile.biography == "b" * 120

    def test_remaining_uses_configured_limit(self, store, preferences):
        service = ProfileService(store, SessionCache(store, preferences), max_bio_length=120)
        assert service.biography_remaining("b" * 100) == 20
