# src/presence/service.py - v1
"""Presence consistency service: check-in, check-out and who is where.

A profile is present at a location iff its ``present_at`` reference points
at that location and its ``present`` marker is set. Status checks, counts
and listings all read through ``present_location``, so a half-written
record is absent everywhere until the next check-in rewrites both fields.
Every transition is fetch, mutate, save with last-writer-wins
semantics; a failed save leaves nothing for the caller to apply.
"""

from __future__ import annotations

import logging

from jurados.core import alerts
from jurados.core.errors import StoreError
from jurados.core.models import PROFILE_RECORD_TYPE, Profile, Record
from jurados.core.outcomes import (
    CountsOutcome,
    ListingOutcome,
    OutcomeStatus,
    PresenceEvent,
    PresenceOutcome,
    StatusOutcome,
)
from jurados.logging.context import set_operation_context
from jurados.presence.aggregates import count_by_location, group_by_location
from jurados.presence.state import (
    PRESENT_MARKER,
    clear_presence,
    is_consistent,
    present_location,
    set_presence,
)
from jurados.session.profile_cache import SessionCache
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class _NoProfile(Exception):
    """Internal: no profile id could be resolved."""


class PresenceService:
    """Mediates every transition of the Profile -> Location presence relation."""

    def __init__(self, store: BaseRecordStore, session: SessionCache) -> None:
        self._store = store
        self._session = session

    # --- Transitions ---

    async def check_in(self, location_id: str, profile_id: str | None = None) -> PresenceOutcome:
        """Check the profile in at ``location_id``.

        Always overwrites a previous location; there is no need to check
        out first.
        """
        set_operation_context("check_in", location_id)
        try:
            profile_id = await self._resolve(profile_id)
        except _NoProfile:
            return PresenceOutcome(
                status=OutcomeStatus.RESOLUTION_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )
        except StoreError as e:
            logger.error("Cannot resolve profile for check-in: %s", e)
            return PresenceOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )

        try:
            record = await self._fetch_profile_record(profile_id)
            saved = await self._store.save_record(set_presence(record, location_id))
        except StoreError as e:
            logger.error("Check-in of %s at %s failed: %s", profile_id, location_id, e)
            return PresenceOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.UNABLE_TO_CHECK_IN_OR_OUT
            )

        logger.info("Profile %s checked in at %s", profile_id, location_id)
        return PresenceOutcome(
            event=PresenceEvent(
                kind="checked_in",
                profile=Profile.from_record(saved),
                location_id=location_id,
            )
        )

    async def check_out(self, profile_id: str | None = None) -> PresenceOutcome:
        """Check the profile out of wherever it is checked in.

        The resulting event carries no location: listings remove the
        profile by its own id.
        """
        set_operation_context("check_out")
        try:
            profile_id = await self._resolve(profile_id)
        except _NoProfile:
            return PresenceOutcome(
                status=OutcomeStatus.RESOLUTION_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )
        except StoreError as e:
            logger.error("Cannot resolve profile for check-out: %s", e)
            return PresenceOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )

        try:
            record = await self._fetch_profile_record(profile_id)
            previous = present_location(record)
            saved = await self._store.save_record(clear_presence(record))
        except StoreError as e:
            logger.error("Check-out of %s failed: %s", profile_id, e)
            return PresenceOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.UNABLE_TO_CHECK_IN_OR_OUT
            )

        logger.info("Profile %s checked out (was at %s)", profile_id, previous)
        return PresenceOutcome(
            event=PresenceEvent(kind="checked_out", profile=Profile.from_record(saved))
        )

    # --- Reads ---

    async def query_status(self, location_id: str, profile_id: str | None = None) -> StatusOutcome:
        """Is the profile checked in at ``location_id``? Never writes."""
        set_operation_context("query_status", location_id)
        return await self._status(profile_id, lambda current: current == location_id)

    async def is_checked_in(self, profile_id: str | None = None) -> StatusOutcome:
        """Is the profile checked in anywhere? Never writes."""
        set_operation_context("is_checked_in")
        return await self._status(profile_id, lambda current: current is not None)

    async def checked_in_counts(self) -> CountsOutcome:
        """Number of checked-in profiles per location id."""
        set_operation_context("checked_in_counts")
        try:
            profiles = await self._present_profiles({Profile.KEY_PRESENT: PRESENT_MARKER})
        except StoreError as e:
            logger.error("Checked-in counts query failed: %s", e)
            return CountsOutcome(
                status=OutcomeStatus.STORE_FAILURE,
                alert=alerts.UNABLE_TO_GET_CHECKED_IN_PROFILES,
            )
        return CountsOutcome(counts=count_by_location(profiles))

    async def checked_in_listing(self) -> ListingOutcome:
        """Checked-in profiles grouped by location id."""
        set_operation_context("checked_in_listing")
        try:
            profiles = await self._present_profiles({Profile.KEY_PRESENT: PRESENT_MARKER})
        except StoreError as e:
            logger.error("Checked-in listing query failed: %s", e)
            return ListingOutcome(
                status=OutcomeStatus.STORE_FAILURE,
                alert=alerts.UNABLE_TO_GET_CHECKED_IN_PROFILES,
            )
        return ListingOutcome(listing=group_by_location(profiles))

    async def checked_in_profiles(self, location_id: str) -> ListingOutcome:
        """Checked-in profiles at a single location."""
        set_operation_context("checked_in_profiles", location_id)
        try:
            profiles = await self._present_profiles({Profile.KEY_PRESENT_AT: location_id})
        except StoreError as e:
            logger.error("Checked-in profiles query for %s failed: %s", location_id, e)
            return ListingOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.PROFILE_UNAVAILABLE
            )
        listing = group_by_location(profiles)
        return ListingOutcome(listing={location_id: listing.get(location_id, [])})

    # --- Internals ---

    async def _resolve(self, profile_id: str | None) -> str:
        if profile_id:
            return profile_id
        resolved = await self._session.resolve_profile_id()
        if resolved is None:
            logger.info("No profile yet")
            raise _NoProfile
        return resolved

    async def _fetch_profile_record(self, profile_id: str) -> Record:
        record = await self._store.fetch_record(profile_id)
        if record.record_type != PROFILE_RECORD_TYPE:
            raise StoreError(f"Record {profile_id} is a {record.record_type}, not a Profile")
        return record

    async def _status(self, profile_id: str | None, predicate) -> StatusOutcome:
        try:
            profile_id = await self._resolve(profile_id)
        except _NoProfile:
            return StatusOutcome(status=OutcomeStatus.RESOLUTION_FAILURE)
        except StoreError as e:
            logger.error("Cannot resolve profile for status: %s", e)
            return StatusOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.UNABLE_TO_GET_CHECKIN_STATUS
            )

        try:
            record = await self._fetch_profile_record(profile_id)
        except StoreError as e:
            logger.error("Check-in status of %s unavailable: %s", profile_id, e)
            return StatusOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.UNABLE_TO_GET_CHECKIN_STATUS
            )
        return StatusOutcome(is_present=bool(predicate(present_location(record))))

    async def _present_profiles(self, filters: dict) -> list[Profile]:
        result = await self._store.query(PROFILE_RECORD_TYPE, filters)
        for failure in result.failures:
            logger.warning("Skipped profile %s: %s", failure.record_id, failure.reason)

        profiles: list[Profile] = []
        for record in result.records:
            if present_location(record) is None:
                if not is_consistent(record):
                    logger.warning(
                        "Skipped profile %s: inconsistent presence fields", record.record_id
                    )
                continue
            try:
                profiles.append(Profile.from_record(record))
            except ValueError as e:
                logger.warning("Skipped profile %s: %s", record.record_id, e)
        return profiles
