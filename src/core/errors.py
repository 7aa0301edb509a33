# src/core/errors.py - v1
"""Record store exception hierarchy.

Adapters translate backend-specific exceptions into these with
``raise ... from``. Services catch ``StoreError`` once, at the operation
boundary, and turn it into a ``STORE_FAILURE`` outcome.
"""

from __future__ import annotations


class StoreError(Exception):
    """Raised when a record store call fails (network, auth, remote error)."""


class RecordNotFoundError(StoreError):
    """Raised when a record id does not exist in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record not found: {record_id}")
        self.record_id = record_id


class StoreAuthError(StoreError):
    """Raised when the store cannot identify the current user."""


class BatchSaveError(StoreError):
    """Raised when an atomic multi-record save fails. Nothing was written."""

    def __init__(self, message: str, record_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.record_ids = list(record_ids or [])
