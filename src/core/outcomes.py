# src/core/outcomes.py - v1
"""Operation outcomes returned by the services.

Validation and "no profile yet" are ordinary outcomes the caller branches
on, not exceptions. A store failure is reported once per operation with
the alert chosen by the call site.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from jurados.core.alerts import Alert
from jurados.core.models import Location, Profile


class OutcomeStatus(str, Enum):
    OK = "ok"
    VALIDATION_FAILURE = "validation_failure"
    # No profile id resolvable yet: the caller should offer profile creation.
    RESOLUTION_FAILURE = "resolution_failure"
    STORE_FAILURE = "store_failure"


class Outcome(BaseModel):
    """Common shape of every service result."""

    status: OutcomeStatus = OutcomeStatus.OK
    alert: Alert | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.OK


class PresenceEvent(BaseModel):
    """A committed presence transition, for the presentation layer to apply."""

    kind: Literal["checked_in", "checked_out"]
    profile: Profile
    location_id: str | None = None


class PresenceOutcome(Outcome):
    event: PresenceEvent | None = None


class StatusOutcome(Outcome):
    is_present: bool = False


class CountsOutcome(Outcome):
    """Checked-in count per location id. Missing keys mean zero."""

    counts: dict[str, int] = Field(default_factory=dict)

    def count_for(self, location_id: str) -> int:
        return self.counts.get(location_id, 0)


class ListingOutcome(Outcome):
    """Checked-in profiles per location id."""

    listing: dict[str, list[Profile]] = Field(default_factory=dict)

    def profiles_for(self, location_id: str) -> list[Profile]:
        return list(self.listing.get(location_id, []))


class ProfileAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"


class ProfileOutcome(Outcome):
    profile: Profile | None = None


class ProfileSaveOutcome(Outcome):
    action: ProfileAction | None = None
    profile: Profile | None = None
    errors: list[str] = Field(default_factory=list)


class LocationsOutcome(Outcome):
    locations: list[Location] = Field(default_factory=list)
