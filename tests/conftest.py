# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides seeded memory record stores, file-backed preferences, sample
Location records and a small in-memory PNG. No external services.
"""

from __future__ import annotations

import io

import pytest
from PIL import Image

from factories import make_location, make_profile, make_user
from jurados.core.models import Record
from jurados.preferences.json_store import JsonPreferencesStore
from jurados.session.profile_cache import SessionCache
from jurados.store.memory_store import MemoryRecordStore


# === FIXTURES: Sample data ===


@pytest.fixture
def locations() -> list[Record]:
    """Three restaurant locations, deliberately not in name order."""
    return [
        make_location("loc_centro", "Centro", phone="+34 600 000 001"),
        make_location("loc_bahia", "Bahia", coordinate={"latitude": 36.5, "longitude": -6.3}),
        make_location("loc_museo", "Museo"),
    ]


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGBA", (8, 8), (200, 40, 40, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


# === FIXTURES: Stores ===


@pytest.fixture
def store(locations) -> MemoryRecordStore:
    """Memory store seeded with locations, no profile yet."""
    return MemoryRecordStore(records=[*locations, make_user()])


@pytest.fixture
def store_with_profile(locations) -> MemoryRecordStore:
    """Memory store where the signed-in user already owns profile ``prof_1``."""
    return MemoryRecordStore(
        records=[*locations, make_user("prof_1"), make_profile("prof_1")]
    )


@pytest.fixture
def preferences(tmp_path) -> JsonPreferencesStore:
    return JsonPreferencesStore(root=tmp_path / "prefs")


@pytest.fixture
def session(store, preferences) -> SessionCache:
    return SessionCache(store, preferences)
