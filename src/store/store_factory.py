# src/store/store_factory.py - v1
"""Factory for record store instantiation."""

from __future__ import annotations

from jurados.config.settings import Settings
from jurados.store.base_record_store import BaseRecordStore


def create_record_store(settings: Settings | None = None) -> BaseRecordStore:
    """Instantiate the configured record store backend.

    Args:
        settings: Application settings. Defaults to the memory backend.

    Returns:
        Configured BaseRecordStore implementation.
    """
    backend = "memory" if settings is None else settings.record_store_backend
    user = "local-user" if settings is None else settings.record_store_user

    if backend == "memory":
        from jurados.store.memory_store import MemoryRecordStore
        return MemoryRecordStore(user_record_id=user)

    if backend == "arangodb":
        from jurados.store.arangodb_store import ArangoRecordStore
        assert settings is not None
        return ArangoRecordStore(
            url=settings.arangodb_url,
            database=settings.arangodb_database,
            user=settings.arangodb_user,
            password=settings.arangodb_password,
            collection=settings.arangodb_collection,
            identity=user,
        )

    raise ValueError(f"Unsupported record store backend: {backend!r}")
