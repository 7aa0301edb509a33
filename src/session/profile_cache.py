# src/session/profile_cache.py - v1
"""Session/profile cache: who is the current user and which Profile is theirs.

Resolution order for the profile record id:
  1. durable preferences (no network call);
  2. the ``user_profile`` reference on the identity record, fetched once
     per process and kept in memory. A hit here is written back to
     preferences so the next resolution takes path 1;
  3. otherwise None: the user has no profile yet.
"""

from __future__ import annotations

import logging

from jurados.core.models import USER_PROFILE_KEY, Record
from jurados.logging.context import set_session_context
from jurados.preferences.base_preferences_store import PROFILE_ID_KEY, BasePreferencesStore
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class SessionCache:
    """Caches the identity record and the user's profile record id.

    The identity record is fetched at most once: the first successful fetch
    wins and is never re-fetched. Concurrent first fetches are not
    synchronized; a fetch that completes after another one has been cached
    is discarded. The only replacement is ``adopt_user_record`` after a
    committed batch that included the identity record.
    """

    def __init__(self, store: BaseRecordStore, preferences: BasePreferencesStore) -> None:
        self._store = store
        self._preferences = preferences
        self._user_record: Record | None = None

    @property
    def user_record(self) -> Record | None:
        """The cached identity record, or None before the first fetch."""
        return self._user_record

    async def get_user_record(self) -> Record:
        """Return the identity record, fetching it on first use.

        Raises:
            StoreError: If the identity record cannot be fetched.
        """
        if self._user_record is not None:
            return self._user_record
        user_record_id = await self._store.current_user_record_id()
        record = await self._store.fetch_record(user_record_id)
        if self._user_record is None:
            self._user_record = record
            set_session_context(user_record_id=record.record_id)
            logger.info("Identity record %s cached", record.record_id)
        return self._user_record

    def adopt_user_record(self, record: Record) -> None:
        """Replace the cached identity record with a freshly committed copy."""
        self._user_record = record

    async def resolve_profile_id(self) -> str | None:
        """Resolve the current user's profile record id.

        Returns:
            The profile id, or None when the user has not created a
            profile yet.

        Raises:
            StoreError: If the identity record had to be fetched and the
                fetch failed.
        """
        cached = await self._preferences.get_string(PROFILE_ID_KEY)
        if cached:
            logger.debug("Profile id %s resolved from preferences", cached)
            set_session_context(profile_id=cached)
            return cached

        user_record = await self.get_user_record()
        reference = user_record.reference(USER_PROFILE_KEY)
        if reference is None:
            logger.info("No profile reference on identity record")
            return None

        await self._preferences.put(PROFILE_ID_KEY, reference.record_id)
        set_session_context(profile_id=reference.record_id)
        logger.info("Profile id %s resolved from identity record", reference.record_id)
        return reference.record_id

    async def remember_profile_id(self, profile_id: str) -> None:
        """Persist a newly created profile id for the fast path."""
        await self._preferences.put(PROFILE_ID_KEY, profile_id)
        set_session_context(profile_id=profile_id)

    async def forget_profile_id(self) -> None:
        await self._preferences.delete(PROFILE_ID_KEY)
