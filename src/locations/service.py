# src/locations/service.py - v1
"""Restaurant locations (read-only reference data)."""

from __future__ import annotations

import logging

from jurados.core import alerts
from jurados.core.errors import StoreError
from jurados.core.models import LOCATION_RECORD_TYPE, Location
from jurados.core.outcomes import LocationsOutcome, OutcomeStatus
from jurados.logging.context import set_operation_context
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, store: BaseRecordStore) -> None:
        self._store = store

    async def list_locations(self) -> LocationsOutcome:
        """All locations, sorted by name."""
        set_operation_context("list_locations")
        try:
            result = await self._store.query(
                LOCATION_RECORD_TYPE, sort_by=Location.KEY_NAME, ascending=True
            )
        except StoreError as e:
            logger.error("Cannot list locations: %s", e)
            return LocationsOutcome(
                status=OutcomeStatus.STORE_FAILURE, alert=alerts.UNABLE_TO_GET_LOCATIONS
            )

        for failure in result.failures:
            logger.warning("Skipped location %s: %s", failure.record_id, failure.reason)

        locations: list[Location] = []
        for record in result.records:
            try:
                locations.append(Location.from_record(record))
            except ValueError as e:
                logger.warning("Skipped location %s: %s", record.record_id, e)
        return LocationsOutcome(locations=locations)
