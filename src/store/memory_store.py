# src/store/memory_store.py - v1
"""In-process record store (RECORD_STORE_BACKEND=memory).

Keeps every record as an encoded document, so reads and writes never share
mutable state with callers. Used for local development, demos and tests.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from jurados.core.errors import (
    BatchSaveError,
    RecordNotFoundError,
    StoreAuthError,
    StoreError,
)
from jurados.core.models import (
    USERS_RECORD_TYPE,
    QueryResult,
    Record,
    RecordFailure,
    RecordReference,
    ReferenceAction,
)
from jurados.store.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class MemoryRecordStore(BaseRecordStore):
    """Dictionary-backed record store."""

    def __init__(
        self,
        records: Iterable[Record] = (),
        user_record_id: str | None = "local-user",
    ) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._user_record_id = user_record_id
        for record in records:
            self._documents[record.record_id] = record.to_document()

    async def fetch_record(self, record_id: str) -> Record:
        doc = self._documents.get(record_id)
        if doc is None:
            raise RecordNotFoundError(record_id)
        try:
            return Record.from_document(copy.deepcopy(doc))
        except ValueError as e:
            raise StoreError(f"Cannot decode record {record_id}: {e}") from e

    async def save_record(self, record: Record) -> Record:
        self._documents[record.record_id] = record.to_document()
        return record.model_copy(deep=True)

    async def delete_record(self, record_id: str) -> None:
        record = await self.fetch_record(record_id)
        del self._documents[record_id]
        for ref in record.references():
            if ref.action == ReferenceAction.CASCADE and ref.record_id in self._documents:
                logger.debug("Cascade delete %s -> %s", record_id, ref.record_id)
                await self.delete_record(ref.record_id)

    async def query(
        self,
        record_type: str,
        filters: dict[str, Any] | None = None,
        sort_by: str | None = None,
        ascending: bool = True,
    ) -> QueryResult:
        result = QueryResult()
        for record_id, doc in self._documents.items():
            if doc.get("record_type") != record_type:
                continue
            try:
                record = Record.from_document(copy.deepcopy(doc))
            except ValueError as e:
                logger.warning("Skipping undecodable record %s: %s", record_id, e)
                result.failures.append(RecordFailure(record_id=record_id, reason=str(e)))
                continue
            if _matches(record, filters or {}):
                result.records.append(record)

        if sort_by:
            result.records.sort(
                key=lambda r: (r.get(sort_by) is None, r.get(sort_by)),
                reverse=not ascending,
            )
        return result

    async def save_records(self, records: list[Record]) -> list[Record]:
        staged: dict[str, dict[str, Any]] = {}
        for record in records:
            if record.record_id in staged:
                raise BatchSaveError(
                    f"Duplicate record {record.record_id} in batch",
                    record_ids=[r.record_id for r in records],
                )
            staged[record.record_id] = record.to_document()
        # Commit point: nothing above touched self._documents.
        self._documents.update(staged)
        logger.debug("Saved batch of %d records", len(staged))
        return [r.model_copy(deep=True) for r in records]

    async def current_user_record_id(self) -> str:
        if not self._user_record_id:
            raise StoreAuthError("No signed-in user")
        if self._user_record_id not in self._documents:
            identity = Record(record_type=USERS_RECORD_TYPE, record_id=self._user_record_id)
            self._documents[identity.record_id] = identity.to_document()
        return self._user_record_id

    @property
    def provider_name(self) -> str:
        return "memory"

    # --- Test/seed helpers ---

    def put_document(self, record_id: str, document: dict[str, Any]) -> None:
        """Store a raw document as-is, bypassing encoding."""
        self._documents[record_id] = document

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)


def _matches(record: Record, filters: dict[str, Any]) -> bool:
    for key, expected in filters.items():
        actual = record.get(key)
        if isinstance(actual, RecordReference):
            actual = actual.record_id
        if isinstance(expected, RecordReference):
            expected = expected.record_id
        if actual is None or actual != expected:
            return False
    return True
