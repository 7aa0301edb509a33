# src/store/arangodb_store.py - v1
"""ArangoDB record store adapter (RECORD_STORE_BACKEND=arangodb).

Uses the python-arango SDK. All records live in one document collection,
keyed by record id; the record type is a document attribute.
Requires: pip install python-arango.
"""

from __future__ import annotations

import logging
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


class ArangoRecordStore(BaseRecordStore):
    """Record store backed by an ArangoDB document collection."""

    def __init__(
        self,
        url: str = "http://localhost:8529",
        database: str = "jurados",
        user: str = "root",
        password: str = "",
        collection: str = "records",
        identity: str = "local-user",
    ) -> None:
        try:
            from arango import ArangoClient
            from arango.exceptions import ArangoError
        except ImportError as e:
            raise ImportError(
                "python-arango package required: pip install python-arango"
            ) from e

        client = ArangoClient(hosts=url)
        self._db = client.db(database, username=user, password=password)
        self._collection_name = collection
        self._identity = identity
        self._arango_error: type[Exception] = ArangoError
        self._ensure_collection()

    def _ensure_collection(self) -> None:
        """Create the records collection and its type index if missing."""
        if not self._db.has_collection(self._collection_name):
            self._db.create_collection(self._collection_name)
            self._db.collection(self._collection_name).add_persistent_index(
                fields=["record_type"]
            )

    def _col(self):
        return self._db.collection(self._collection_name)

    @staticmethod
    def _key(record_id: str) -> str:
        """Build a valid document _key from a record id."""
        return record_id.replace("/", "_").replace(" ", "_")

    def _to_doc(self, record: Record) -> dict[str, Any]:
        doc = record.to_document()
        doc["_key"] = self._key(record.record_id)
        return doc

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> Record:
        return Record.from_document({k: v for k, v in doc.items() if not k.startswith("_")})

    # --- Single records ---

    async def fetch_record(self, record_id: str) -> Record:
        try:
            doc = self._col().get(self._key(record_id))
        except self._arango_error as e:
            raise StoreError(f"Failed to fetch record {record_id}: {e}") from e
        if doc is None:
            raise RecordNotFoundError(record_id)
        try:
            return self._from_doc(doc)
        except ValueError as e:
            raise StoreError(f"Cannot decode record {record_id}: {e}") from e

    async def save_record(self, record: Record) -> Record:
        try:
            self._col().insert(self._to_doc(record), overwrite=True)
        except self._arango_error as e:
            raise StoreError(f"Failed to save record {record.record_id}: {e}") from e
        return record.model_copy(deep=True)

    async def delete_record(self, record_id: str) -> None:
        record = await self.fetch_record(record_id)
        try:
            self._col().delete(self._key(record_id))
        except self._arango_error as e:
            raise StoreError(f"Failed to delete record {record_id}: {e}") from e
        for ref in record.references():
            if ref.action != ReferenceAction.CASCADE:
                continue
            try:
                await self.delete_record(ref.record_id)
            except RecordNotFoundError:
                logger.debug("Cascade target %s already gone", ref.record_id)

    # --- Multi-record ---

    async def query(
        self,
        record_type: str,
        filters: dict[str, Any] | None = None,
        sort_by: str | None = None,
        ascending: bool = True,
    ) -> QueryResult:
        clauses = ["d.record_type == @type"]
        bind: dict[str, Any] = {"@col": self._collection_name, "type": record_type}
        for i, (field, value) in enumerate((filters or {}).items()):
            if isinstance(value, RecordReference):
                value = value.record_id
            # Plain fields compare directly; reference fields by target id.
            clauses.append(
                f"(d.fields.@f{i} == @v{i} OR d.fields.@f{i}.__ref__ == @v{i})"
            )
            bind[f"f{i}"] = field
            bind[f"v{i}"] = value

        aql = f"FOR d IN @@col FILTER {' AND '.join(clauses)}"
        if sort_by:
            aql += f" SORT d.fields.@sort {'ASC' if ascending else 'DESC'}"
            bind["sort"] = sort_by
        aql += " RETURN d"

        try:
            cursor = self._db.aql.execute(aql, bind_vars=bind)
            docs = list(cursor)
        except self._arango_error as e:
            raise StoreError(f"Query on {record_type} failed: {e}") from e

        result = QueryResult()
        for doc in docs:
            try:
                result.records.append(self._from_doc(doc))
            except ValueError as e:
                record_id = doc.get("record_id") or doc.get("_key")
                logger.warning("Skipping undecodable record %s: %s", record_id, e)
                result.failures.append(RecordFailure(record_id=record_id, reason=str(e)))
        return result

    async def save_records(self, records: list[Record]) -> list[Record]:
        record_ids = [r.record_id for r in records]
        try:
            txn = self._db.begin_transaction(write=[self._collection_name])
        except self._arango_error as e:
            raise BatchSaveError(f"Cannot start transaction: {e}", record_ids) from e

        try:
            col = txn.collection(self._collection_name)
            for record in records:
                col.insert(self._to_doc(record), overwrite=True)
            txn.commit_transaction()
        except self._arango_error as e:
            try:
                txn.abort_transaction()
            except self._arango_error as abort_error:
                logger.error("Failed to abort transaction: %s", abort_error)
            raise BatchSaveError(f"Batch save failed: {e}", record_ids) from e

        logger.debug("Committed batch of %d records", len(records))
        return [r.model_copy(deep=True) for r in records]

    # --- Identity ---

    async def current_user_record_id(self) -> str:
        if not self._identity:
            raise StoreAuthError("No signed-in user")
        key = self._key(self._identity)
        try:
            col = self._col()
            if not col.has(key):
                identity = Record(record_type=USERS_RECORD_TYPE, record_id=key)
                col.insert(self._to_doc(identity))
        except self._arango_error as e:
            raise StoreAuthError(f"Cannot resolve user record: {e}") from e
        return key

    @property
    def provider_name(self) -> str:
        return "arangodb"
