# src/presence/board.py - v1
"""In-memory view of who is checked in where, owned by the presentation layer.

The board is only mutated from the event loop's thread (the UI context):
load it from a listing query, then apply the events returned by
``PresenceService`` transitions. A profile appears under at most one
location.
"""

from __future__ import annotations

from jurados.core.models import Profile
from jurados.core.outcomes import PresenceEvent


class PresenceBoard:
    def __init__(self, listing: dict[str, list[Profile]] | None = None) -> None:
        self._listing: dict[str, list[Profile]] = {}
        if listing:
            self.replace(listing)

    def replace(self, listing: dict[str, list[Profile]]) -> None:
        """Replace the whole board with a fresh query snapshot."""
        self._listing = {loc: list(profiles) for loc, profiles in listing.items() if profiles}

    def set_location(self, location_id: str, profiles: list[Profile]) -> None:
        """Replace one location's listing (location detail refresh)."""
        ids = {p.profile_id for p in profiles}
        for loc in list(self._listing):
            if loc != location_id:
                self._drop(loc, ids)
        if profiles:
            self._listing[location_id] = list(profiles)
        else:
            self._listing.pop(location_id, None)

    def apply(self, event: PresenceEvent) -> None:
        """Apply a committed check-in or check-out."""
        profile_id = event.profile.profile_id
        for loc in list(self._listing):
            self._drop(loc, {profile_id})
        if event.kind == "checked_in" and event.location_id is not None:
            self._listing.setdefault(event.location_id, []).append(event.profile)

    def profiles_at(self, location_id: str) -> list[Profile]:
        return list(self._listing.get(location_id, []))

    def count_at(self, location_id: str) -> int:
        return len(self._listing.get(location_id, []))

    def counts(self) -> dict[str, int]:
        return {loc: len(profiles) for loc, profiles in self._listing.items()}

    def location_of(self, profile_id: str) -> str | None:
        for loc, profiles in self._listing.items():
            if any(p.profile_id == profile_id for p in profiles):
                return loc
        return None

    def _drop(self, location_id: str, profile_ids: set[str]) -> None:
        remaining = [p for p in self._listing[location_id] if p.profile_id not in profile_ids]
        if remaining:
            self._listing[location_id] = remaining
        else:
            del self._listing[location_id]
