"""The document store contract the training log core is written against.

A store keeps four flat collections per user, streams full snapshots of a
collection to subscribers whenever it changes, and applies batches of
writes atomically.
"""

from dataclasses import dataclass
from typing import Any, Callable, Literal, Protocol

from tracklog.errors import SyncError
from tracklog.models import Collection

Document = dict[str, Any]

SnapshotCallback = Callable[[list[Document]], None]
ErrorCallback = Callable[[SyncError], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class WriteOp:
    """A single write queued in a batch."""

    kind: Literal["set", "delete"]
    collection: Collection
    doc_id: str
    document: Document | None = None


class WriteBatch:
    """Writes queued for one atomic commit.

    Backends subclass this and implement `commit`. Either every queued write
    is applied or none is.
    """

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        self.ops: list[WriteOp] = []

    def set(self, collection: Collection, document: Document) -> "WriteBatch":
        """Queue a create-or-replace of `document` (keyed by its "id")."""
        self.ops.append(WriteOp("set", collection, document["id"], dict(document)))
        return self

    def delete(self, collection: Collection, doc_id: str) -> "WriteBatch":
        """Queue a delete. Deleting a missing document is a no-op."""
        self.ops.append(WriteOp("delete", collection, doc_id))
        return self

    def __len__(self) -> int:
        return len(self.ops)

    async def commit(self) -> None:
        """Apply every queued write atomically.

        Raises:
            BatchWriteError: If the batch could not be applied.
        """
        raise NotImplementedError


class DocumentStore(Protocol):
    async def get(
        self, user_id: str, collection: Collection, doc_id: str
    ) -> Document | None: ...

    async def query(
        self, user_id: str, collection: Collection, field: str, value: Any
    ) -> list[Document]: ...

    def batch(self, user_id: str) -> WriteBatch: ...

    def subscribe(
        self,
        user_id: str,
        collection: Collection,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe: ...
