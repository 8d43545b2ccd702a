"""Process-local document store.

Snapshots are delivered synchronously: `subscribe` delivers the current
contents before returning, and every committed batch delivers a fresh
snapshot of each collection it touched, in commit order.
"""

import copy
import logging
from collections import defaultdict
from typing import Any

from tracklog.errors import BatchWriteError, SyncError
from tracklog.models import Collection, COLLECTIONS
from .store import (
    Document,
    ErrorCallback,
    SnapshotCallback,
    Unsubscribe,
    WriteBatch,
)

logger = logging.getLogger(__name__)

_Key = tuple[str, Collection]


class InMemoryWriteBatch(WriteBatch):
    def __init__(self, store: "InMemoryStore", user_id: str) -> None:
        super().__init__(user_id)
        self._store = store

    async def commit(self) -> None:
        self._store.apply(self)


class InMemoryStore:
    """Dict-backed store keyed by (user_id, collection)."""

    def __init__(self) -> None:
        self._data: dict[_Key, dict[str, Document]] = defaultdict(dict)
        self._listeners: dict[_Key, dict[int, tuple[SnapshotCallback, ErrorCallback]]] = defaultdict(dict)
        self._next_token = 0

    async def get(
        self, user_id: str, collection: Collection, doc_id: str
    ) -> Document | None:
        doc = self._data[(user_id, collection)].get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(
        self, user_id: str, collection: Collection, field: str, value: Any
    ) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self._data[(user_id, collection)].values()
            if doc.get(field) == value
        ]

    def batch(self, user_id: str) -> InMemoryWriteBatch:
        return InMemoryWriteBatch(self, user_id)

    def apply(self, batch: WriteBatch) -> None:
        """Apply a batch all-or-nothing, then notify subscribers."""
        for op in batch.ops:
            if op.collection not in COLLECTIONS:
                raise BatchWriteError(
                    f"Unknown collection '{op.collection}' in batch",
                    operation_count=len(batch),
                )
            if op.kind == "set" and not op.doc_id:
                raise BatchWriteError(
                    "Cannot write a document without an id",
                    operation_count=len(batch),
                )

        touched: list[Collection] = []
        for op in batch.ops:
            docs = self._data[(batch.user_id, op.collection)]
            if op.kind == "set":
                docs[op.doc_id] = copy.deepcopy(op.document)
            else:
                docs.pop(op.doc_id, None)
            if op.collection not in touched:
                touched.append(op.collection)

        logger.debug(f"Applied batch of {len(batch)} writes for user {batch.user_id}")
        for collection in touched:
            self._notify(batch.user_id, collection)

    def subscribe(
        self,
        user_id: str,
        collection: Collection,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        key = (user_id, collection)
        token = self._next_token
        self._next_token += 1
        self._listeners[key][token] = (on_snapshot, on_error)
        on_snapshot(self._snapshot(key))

        def unsubscribe() -> None:
            self._listeners[key].pop(token, None)

        return unsubscribe

    def subscriber_count(self, user_id: str, collection: Collection) -> int:
        return len(self._listeners[(user_id, collection)])

    def _snapshot(self, key: _Key) -> list[Document]:
        return [copy.deepcopy(doc) for doc in self._data[key].values()]

    def _notify(self, user_id: str, collection: Collection) -> None:
        key = (user_id, collection)
        # Copy: a callback may unsubscribe while we iterate.
        for on_snapshot, on_error in list(self._listeners[key].values()):
            # Writes are already applied, so subscriber failures go to on_error.
            try:
                on_snapshot(self._snapshot(key))
            except Exception as e:
                logger.exception(f"Subscriber to {collection} (user {user_id}) failed: {e}")
                on_error(SyncError(collection, str(e)))
