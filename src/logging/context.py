# src/logging/context.py - v1
"""Contextual logging support: attach user record, profile, operation and
location ids to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per session and per operation.
_user_record_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "user_record_id", default=None
)
_profile_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_location_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "location_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    user_record_id: str | None = None
    profile_id: str | None = None
    operation: str | None = None
    location_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        user_record_id=_user_record_id.get(),
        profile_id=_profile_id.get(),
        operation=_operation.get(),
        location_id=_location_id.get(),
    )


def set_session_context(
    user_record_id: str | None = None, profile_id: str | None = None
) -> None:
    """Set session-level context. None leaves the current value untouched."""
    if user_record_id is not None:
        _user_record_id.set(user_record_id)
    if profile_id is not None:
        _profile_id.set(profile_id)


def set_operation_context(operation: str, location_id: str | None = None) -> None:
    """Set operation-level context (called per service operation)."""
    _operation.set(operation)
    _location_id.set(location_id)


def clear_context() -> None:
    """Reset all context variables."""
    _user_record_id.set(None)
    _profile_id.set(None)
    _operation.set(None)
    _location_id.set(None)
