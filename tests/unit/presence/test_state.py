# tests/unit/presence/test_state.py - v1
"""Tests for presence/state.py."""

from __future__ import annotations

from factories import make_profile
from jurados.core.models import RecordReference
from jurados.presence.state import (
    PRESENT_MARKER,
    clear_presence,
    is_consistent,
    present_location,
    set_presence,
)


class TestPresenceFields:
    def test_set_writes_both_fields(self):
        record = set_presence(make_profile("p1"), "loc_1")
        assert present_location(record) == "loc_1"
        assert record.get("present") == PRESENT_MARKER
        assert is_consistent(record)

    def test_set_replaces_previous_location(self):
        record = set_presence(set_presence(make_profile("p1"), "loc_1"), "loc_2")
        assert present_location(record) == "loc_2"
        assert is_consistent(record)

    def test_clear_removes_both_fields(self):
        record = clear_presence(set_presence(make_profile("p1"), "loc_1"))
        assert "present_at" not in record.fields
        assert "present" not in record.fields
        assert present_location(record) is None
        assert is_consistent(record)

    def test_never_checked_in_is_consistent(self):
        assert is_consistent(make_profile("p1"))

    def test_marker_without_reference_is_inconsistent(self):
        assert not is_consistent(make_profile("p1", present=1))

    def test_reference_without_marker_is_inconsistent(self):
        record = make_profile("p1", present_at=RecordReference(record_id="loc_1"))
        assert not is_consistent(record)

    def test_half_written_record_reads_as_checked_out(self):
        reference_only = make_profile("p1", present_at=RecordReference(record_id="loc_1"))
        marker_only = make_profile("p2", present=PRESENT_MARKER)
        assert present_location(reference_only) is None
        assert present_location(marker_only) is None
