# tests/unit/logging/test_context.py - v1
"""Tests for logging/context.py."""

from __future__ import annotations

import pytest

from jurados.logging.context import (
    clear_context,
    get_context,
    set_operation_context,
    set_session_context,
)


@pytest.fixture(autouse=True)
def _reset():
    clear_context()
    yield
    clear_context()


class TestLogContext:
    def test_empty_by_default(self):
        assert get_context().as_dict() == {}

    def test_session_context(self):
        set_session_context(user_record_id="u1", profile_id="p1")
        ctx = get_context()
        assert ctx.user_record_id == "u1"
        assert ctx.profile_id == "p1"

    def test_none_keeps_existing_value(self):
        set_session_context(user_record_id="u1", profile_id="p1")
        set_session_context(profile_id="p2")
        ctx = get_context()
        assert ctx.user_record_id == "u1"
        assert ctx.profile_id == "p2"

    def test_operation_context_resets_location(self):
        set_operation_context("check_in", "loc_1")
        assert get_context().location_id == "loc_1"
        set_operation_context("check_out")
        ctx = get_context()
        assert ctx.operation == "check_out"
        assert ctx.location_id is None

    def test_as_dict_skips_none(self):
        set_operation_context("list_locations")
        assert get_context().as_dict() == {"operation": "list_locations"}

    def test_clear(self):
        set_session_context(user_record_id="u1")
        set_operation_context("check_in", "loc_1")
        clear_context()
        assert get_context().as_dict() == {}
