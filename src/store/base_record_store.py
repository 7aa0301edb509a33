# src/store/base_record_store.py - v1
"""Abstract record store interface.

The record store is the managed document database behind the app: record
CRUD, field-equality queries, reference fields and atomic multi-record
saves. Adapters own no business rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from jurados.core.models import QueryResult, Record


class BaseRecordStore(ABC):
    """Unified interface for record store backends.

    Every method may raise ``jurados.core.errors.StoreError``. No timeout,
    retry or cancellation is added on top of what the backend provides.
    """

    # --- Single records ---

    @abstractmethod
    async def fetch_record(self, record_id: str) -> Record:
        """Fetch a record by id.

        Raises:
            RecordNotFoundError: If the id does not exist.
            StoreError: On any other backend failure.
        """

    @abstractmethod
    async def save_record(self, record: Record) -> Record:
        """Insert or replace a record. Returns the stored copy."""

    @abstractmethod
    async def delete_record(self, record_id: str) -> None:
        """Delete a record and, recursively, every record it references
        with ``ReferenceAction.CASCADE``."""

    # --- Multi-record ---

    @abstractmethod
    async def query(
        self,
        record_type: str,
        filters: dict[str, Any] | None = None,
        sort_by: str | None = None,
        ascending: bool = True,
    ) -> QueryResult:
        """Find records of ``record_type`` whose fields equal ``filters``.

        A filter value matches a reference field when it equals the
        referenced record id. Records that cannot be decoded are reported
        in ``QueryResult.failures`` and skipped; they never fail the query.
        """

    @abstractmethod
    async def save_records(self, records: list[Record]) -> list[Record]:
        """Save several records atomically: all are written or none are.

        Raises:
            BatchSaveError: If the batch could not be committed.
        """

    # --- Identity ---

    @abstractmethod
    async def current_user_record_id(self) -> str:
        """Return the id of the signed-in user's identity record.

        Raises:
            StoreAuthError: If no user identity is available.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (memory, arangodb)."""
