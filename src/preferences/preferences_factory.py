# src/preferences/preferences_factory.py - v1
"""Factory for preferences store instantiation."""

from __future__ import annotations

from jurados.config.settings import Settings
from jurados.preferences.base_preferences_store import BasePreferencesStore


def create_preferences_store(settings: Settings | None = None) -> BasePreferencesStore:
    """Instantiate the configured preferences backend.

    Args:
        settings: Application settings. Defaults to the JSON backend.

    Returns:
        Configured BasePreferencesStore implementation.
    """
    backend = "json" if settings is None else settings.preferences_backend
    root = "~/.jurados/preferences" if settings is None else str(settings.preferences_root)

    if backend == "json":
        from jurados.preferences.json_store import JsonPreferencesStore
        return JsonPreferencesStore(root=root)

    if backend == "sqlite":
        from jurados.preferences.sqlite_store import SqlitePreferencesStore
        return SqlitePreferencesStore(db_path=f"{root}/preferences.db")

    if backend == "redis":
        from jurados.preferences.redis_store import RedisPreferencesStore
        if settings is None or not settings.preferences_redis_url:
            raise ValueError(
                "PREFERENCES_REDIS_URL must be set when PREFERENCES_BACKEND=redis"
            )
        return RedisPreferencesStore(
            redis_url=settings.preferences_redis_url,
            namespace=settings.record_store_user,
        )

    raise ValueError(f"Unsupported preferences backend: {backend!r}")
