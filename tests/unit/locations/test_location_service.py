# tests/unit/locations/test_location_service.py - v1
"""Tests for locations/service.py."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from jurados.core import alerts
from jurados.core.errors import StoreError
from jurados.core.models import LOCATION_RECORD_TYPE
from jurados.core.outcomes import OutcomeStatus
from jurados.locations.service import LocationService


class TestListLocations:
    @pytest.mark.asyncio
    async def test_sorted_by_name(self, store):
        outcome = await LocationService(store).list_locations()
        assert outcome.ok
        assert [loc.name for loc in outcome.locations] == ["Bahia", "Centro", "Museo"]
        assert outcome.locations[0].coordinate.latitude == 36.5

    @pytest.mark.asyncio
    async def test_bad_records_skipped(self, store):
        store.put_document(
            "loc_bad",
            {
                "record_type": LOCATION_RECORD_TYPE,
                "record_id": "loc_bad",
                "fields": {"name": "Aaa", "coordinate": {"latitude": "nowhere"}},
            },
        )
        store.put_document(
            "loc_worse",
            {"record_type": LOCATION_RECORD_TYPE, "record_id": "loc_worse", "fields": "oops"},
        )
        outcome = await LocationService(store).list_locations()
        assert outcome.ok
        assert [loc.location_id for loc in outcome.locations] == [
            "loc_bahia", "loc_centro", "loc_museo",
        ]

    @pytest.mark.asyncio
    async def test_store_failure(self, store):
        store.query = AsyncMock(side_effect=StoreError("offline"))
        outcome = await LocationService(store).list_locations()
        assert outcome.status == OutcomeStatus.STORE_FAILURE
        assert outcome.alert == alerts.UNABLE_TO_GET_LOCATIONS
        assert outcome.locations == []
