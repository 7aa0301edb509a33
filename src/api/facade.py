# src/api/facade.py - v1
"""Public API facade: one object that wires every service.

Usage:
    from jurados.api.facade import build_app
    app = build_app()
    outcome = await app.presence.check_in(location_id)

The record store and preferences are constructed once and injected into
the services; there is no module-level singleton.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jurados.config.settings import Settings
from jurados.locations.service import LocationService
from jurados.preferences.base_preferences_store import BasePreferencesStore
from jurados.presence.service import PresenceService
from jurados.profiles.service import ProfileService
from jurados.session.onboarding import OnboardingTracker
from jurados.session.profile_cache import SessionCache
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JuradosApp:
    settings: Settings
    store: BaseRecordStore
    preferences: BasePreferencesStore

    session: SessionCache
    onboarding: OnboardingTracker
    presence: PresenceService
    profiles: ProfileService
    locations: LocationService


def build_app(
    settings: Settings | None = None,
    store: BaseRecordStore | None = None,
    preferences: BasePreferencesStore | None = None,
) -> JuradosApp:
    """Build the service container.

    Args:
        settings: Global settings. Loaded from .env if None.
        store: Record store. Created from settings if None.
        preferences: Durable preferences. Created from settings if None.

    Returns:
        JuradosApp with every service sharing the same store and session.
    """
    settings = settings or Settings()

    if store is None:
        from jurados.store.store_factory import create_record_store
        store = create_record_store(settings)
    if preferences is None:
        from jurados.preferences.preferences_factory import create_preferences_store
        preferences = create_preferences_store(settings)

    session = SessionCache(store, preferences)
    logger.info(
        "App built: store=%s, preferences=%s",
        store.provider_name, type(preferences).__name__,
    )

    return JuradosApp(
        settings=settings,
        store=store,
        preferences=preferences,
        session=session,
        onboarding=OnboardingTracker(preferences),
        presence=PresenceService(store, session),
        profiles=ProfileService(
            store,
            session,
            min_bio_length=settings.profile_bio_min_length,
            max_bio_length=settings.profile_bio_max_length,
            jpeg_quality=settings.avatar_jpeg_quality,
        ),
        locations=LocationService(store),
    )
