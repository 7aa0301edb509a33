# src/presence/state.py - v1
"""The only writers of a Profile record's presence fields.

``present_at`` (reference to a Location) names the location.
``present`` duplicates it as a plain marker so the store can be queried
for "checked in anywhere", which it cannot do on a null reference. Both
fields are written together here and nowhere else, and every read of
presence goes through ``present_location``.
"""

from __future__ import annotations

from jurados.core.models import Profile, Record, RecordReference, ReferenceAction

PRESENT_MARKER = Profile.PRESENT_MARKER


def set_presence(record: Record, location_id: str) -> Record:
    """Mark the profile as checked in at ``location_id``, replacing any prior
    location."""
    record.set(
        Profile.KEY_PRESENT_AT,
        RecordReference(record_id=location_id, action=ReferenceAction.NONE),
    )
    record.set(Profile.KEY_PRESENT, PRESENT_MARKER)
    return record


def clear_presence(record: Record) -> Record:
    """Mark the profile as checked out."""
    record.set(Profile.KEY_PRESENT_AT, None)
    record.set(Profile.KEY_PRESENT, None)
    return record


def present_location(record: Record) -> str | None:
    """Location id the profile is checked in at, or None.

    A profile counts as present only when both fields are set. Half-written
    records read as checked out, the same answer the aggregate queries give.
    """
    if not is_consistent(record):
        return None
    reference = record.reference(Profile.KEY_PRESENT_AT)
    return reference.record_id if reference else None


def is_consistent(record: Record) -> bool:
    """True when the marker is set iff the reference is set."""
    has_reference = record.reference(Profile.KEY_PRESENT_AT) is not None
    has_marker = record.get(Profile.KEY_PRESENT) == PRESENT_MARKER
    return has_reference == has_marker
