# src/profiles/service.py - v1
"""Profile load and create-or-update.

A user owns exactly one Profile, linked from their identity record by a
cascade reference. Saving decides between update (the reference exists)
and create (it does not), and commits the identity record and the profile
record as one atomic batch.
"""

from __future__ import annotations

import logging
from typing import Any

from jurados.core import alerts
from jurados.core.errors import StoreError
from jurados.core.models import (
    PROFILE_RECORD_TYPE,
    USER_PROFILE_KEY,
    Profile,
    Record,
    RecordReference,
    ReferenceAction,
)
from jurados.core.outcomes import (
    OutcomeStatus,
    ProfileAction,
    ProfileOutcome,
    ProfileSaveOutcome,
)
from jurados.logging.context import set_operation_context
from jurados.profiles.validation import (
    DEFAULT_BIO_MAX_LENGTH,
    DEFAULT_BIO_MIN_LENGTH,
    ProfileDraft,
    remaining_characters,
    truncate_biography,
    validate_draft,
)
from jurados.session.profile_cache import SessionCache
from jurados.store.assets import DEFAULT_JPEG_QUALITY, asset_bytes, image_to_asset
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(
        self,
        store: BaseRecordStore,
        session: SessionCache,
        *,
        min_bio_length: int = DEFAULT_BIO_MIN_LENGTH,
        max_bio_length: int = DEFAULT_BIO_MAX_LENGTH,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ) -> None:
        self._store = store
        self._session = session
        self._min_bio_length = int(min_bio_length)
        self._max_bio_length = int(max_bio_length)
        self._jpeg_quality = int(jpeg_quality)

    def biography_remaining(self, text: str) -> int:
        """Characters left before the biography is clipped on save."""
        return remaining_characters(text, self._max_bio_length)

    async def load_profile(self) -> ProfileOutcome:
        """Load the current user's profile.

        Returns RESOLUTION_FAILURE (no alert) when the user has no profile
        yet, so the caller can show the creation flow.
        """
        set_operation_context("load_profile")
        try:
            profile_id = await self._session.resolve_profile_id()
        except StoreError as e:
            logger.error("Cannot resolve profile id: %s", e)
            return ProfileOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )
        if profile_id is None:
            return ProfileOutcome(status=OutcomeStatus.RESOLUTION_FAILURE)

        try:
            record = await self._store.fetch_record(profile_id)
            profile = Profile.from_record(record)
        except (StoreError, ValueError) as e:
            logger.error("Cannot load profile %s: %s", profile_id, e)
            return ProfileOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )
        logger.info("Profile loaded: %s", profile.full_name)
        return ProfileOutcome(profile=profile)

    async def save_profile(self, draft: ProfileDraft) -> ProfileSaveOutcome:
        """Create or update the current user's profile from ``draft``.

        Validation runs first and a rejected draft performs no store call.
        On a failed batch nothing is cached: the in-memory identity record
        and the cached profile id are left as they were.
        """
        set_operation_context("save_profile")
        errors = validate_draft(draft, self._min_bio_length)
        if errors:
            logger.info("Profile draft rejected: %s", "; ".join(errors))
            return ProfileSaveOutcome(
                status=OutcomeStatus.VALIDATION_FAILURE,
                alert=alerts.INCOMPLETE_PROFILE,
                errors=errors,
            )

        try:
            cached_user_record = await self._session.get_user_record()
        except StoreError as e:
            logger.error("Cannot fetch identity record: %s", e)
            return ProfileSaveOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.FAILED_TO_FETCH_USER_RECORD
            )

        # Mutate a copy so a failed batch leaves the session cache untouched.
        user_record = cached_user_record.model_copy(deep=True)
        values = self._field_values(draft)

        try:
            reference = user_record.reference(USER_PROFILE_KEY)
            if reference is not None:
                profile_record = await self._store.fetch_record(reference.record_id)
                action = ProfileAction.UPDATED
            else:
                profile_record = Record(record_type=PROFILE_RECORD_TYPE)
                user_record.set(
                    USER_PROFILE_KEY,
                    RecordReference(
                        record_id=profile_record.record_id, action=ReferenceAction.CASCADE
                    ),
                )
                action = ProfileAction.CREATED

            for key, value in values.items():
                profile_record.set(key, value)

            saved_user, saved_profile = await self._store.save_records(
                [user_record, profile_record]
            )
        except StoreError as e:
            logger.error("Profile save failed: %s", e)
            return ProfileSaveOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.ERROR_SAVING_PROFILE
            )

        self._session.adopt_user_record(saved_user)
        await self._session.remember_profile_id(saved_profile.record_id)
        logger.info("Profile %s %s", saved_profile.record_id, action.value)

        return ProfileSaveOutcome(
            action=action,
            alert=alerts.PROFILE_CREATED if action == ProfileAction.CREATED else alerts.PROFILE_UPDATED,
            profile=Profile.from_record(saved_profile),
        )

    def _field_values(self, draft: ProfileDraft) -> dict[str, Any]:
        values: dict[str, Any] = {
            Profile.KEY_FULL_NAME: draft.full_name.strip(),
            Profile.KEY_PROFESSION: draft.profession.strip(),
            Profile.KEY_BIOGRAPHY: truncate_biography(
                draft.biography.strip(), self._max_bio_length
            ),
        }
        if draft.avatar_image:
            # An unreadable image drops the avatar; the rest still saves.
            asset = image_to_asset(draft.avatar_image, quality=self._jpeg_quality)
            if asset is not None:
                values[Profile.KEY_AVATAR] = asset
        return values


def draft_from_profile(profile: Profile) -> ProfileDraft:
    """Prefill an edit form from a loaded profile."""
    return ProfileDraft(
        full_name=profile.full_name,
        profession=profile.profession,
        biography=profile.biography,
        avatar_image=asset_bytes(profile.avatar),
    )
