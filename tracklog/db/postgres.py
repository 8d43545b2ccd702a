"""PostgreSQL-backed document store.

Each collection is a table with a `user_id` column. Row triggers (see the
`0001_create_training_tables` migration) call `pg_notify(<table>, user_id)`
on every change, so a subscription is a LISTEN on the table's channel that
re-reads the user's rows whenever a notification for that user arrives.
Batches run in a single transaction.
"""

import asyncio
import logging
from typing import Any

import psycopg
from psycopg import sql

from tracklog.errors import BatchWriteError, SyncError
from tracklog.models import Collection
from .connection import get_async_db_connection, get_async_db_cursor
from .store import (
    Document,
    ErrorCallback,
    SnapshotCallback,
    Unsubscribe,
    WriteBatch,
    WriteOp,
)

logger = logging.getLogger(__name__)

TABLES: dict[Collection, str] = {
    "cycles": "cycles",
    "workouts": "workouts",
    "dayEntries": "day_entries",
    "seriesSets": "series_sets",
}

COLUMNS: dict[Collection, tuple[str, ...]] = {
    "cycles": ("id", "name", "start_date", "end_date"),
    "workouts": ("id", "cycle_id", "name", "type"),
    "dayEntries": ("id", "workout_id", "date", "notes"),
    "seriesSets": (
        "id",
        "day_entry_id",
        "index",
        "type",
        "run_time",
        "distance_meters",
        "recovery_seconds",
        "is_last",
        "reps",
        "weight",
    ),
}


class PostgresWriteBatch(WriteBatch):
    async def commit(self) -> None:
        if not self.ops:
            return
        try:
            async with get_async_db_connection() as conn:
                async with conn.transaction():
                    async with conn.cursor() as cursor:
                        for op in self.ops:
                            query, params = _write_statement(self.user_id, op)
                            await cursor.execute(query, params)
        except psycopg.Error as e:
            logger.error(f"Batch of {len(self)} writes failed for user {self.user_id}: {e}")
            raise BatchWriteError(
                f"Batch of {len(self)} writes failed: {e}", operation_count=len(self)
            ) from e
        logger.info(f"Committed batch of {len(self)} writes for user {self.user_id}")


class PostgresStore:
    """Document store over the training tables."""

    async def get(
        self, user_id: str, collection: Collection, doc_id: str
    ) -> Document | None:
        docs = await self.query(user_id, collection, "id", doc_id)
        return docs[0] if docs else None

    async def query(
        self, user_id: str, collection: Collection, field: str, value: Any
    ) -> list[Document]:
        """Get the user's documents in `collection` whose `field` equals `value`."""
        if field not in COLUMNS[collection]:
            raise ValueError(f"Unknown field '{field}' for collection {collection}")
        query = sql.SQL("SELECT {columns} FROM {table} WHERE user_id = %s AND {field} = %s").format(
            columns=_column_list(collection),
            table=sql.Identifier(TABLES[collection]),
            field=sql.Identifier(field),
        )
        async with get_async_db_cursor() as cursor:
            await cursor.execute(query, (user_id, value))
            rows = await cursor.fetchall()
        return [_row_to_document(collection, row) for row in rows]

    async def fetch_all(self, user_id: str, collection: Collection) -> list[Document]:
        """Get every document the user has in `collection`."""
        query = sql.SQL("SELECT {columns} FROM {table} WHERE user_id = %s").format(
            columns=_column_list(collection),
            table=sql.Identifier(TABLES[collection]),
        )
        async with get_async_db_cursor() as cursor:
            await cursor.execute(query, (user_id,))
            rows = await cursor.fetchall()
        return [_row_to_document(collection, row) for row in rows]

    def batch(self, user_id: str) -> PostgresWriteBatch:
        return PostgresWriteBatch(user_id)

    def subscribe(
        self,
        user_id: str,
        collection: Collection,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Start listening for changes to the user's `collection`.

        Must be called from a running event loop. The returned callable
        cancels the listener task.
        """
        task = asyncio.get_running_loop().create_task(
            self._listen(user_id, collection, on_snapshot, on_error),
            name=f"listen:{collection}:{user_id}",
        )
        return task.cancel

    async def _listen(
        self,
        user_id: str,
        collection: Collection,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> None:
        channel = TABLES[collection]
        try:
            async with get_async_db_connection(autocommit=True) as conn:
                # LISTEN before the first read so no change slips in between.
                await conn.execute(sql.SQL("LISTEN {}").format(sql.Identifier(channel)))
                on_snapshot(await self.fetch_all(user_id, collection))
                async for notify in conn.notifies():
                    if notify.payload != user_id:
                        continue
                    on_snapshot(await self.fetch_all(user_id, collection))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Listener for {collection} (user {user_id}) failed: {e}")
            on_error(SyncError(collection, str(e)))


# --- Helpers ---


def _column_list(collection: Collection) -> sql.Composable:
    return sql.SQL(", ").join(sql.Identifier(c) for c in COLUMNS[collection])


def _write_statement(user_id: str, op: WriteOp) -> tuple[sql.Composable, list[Any]]:
    """Build the SQL for one queued write."""
    table = sql.Identifier(TABLES[op.collection])
    if op.kind == "delete":
        query = sql.SQL("DELETE FROM {table} WHERE user_id = %s AND id = %s").format(
            table=table
        )
        return query, [user_id, op.doc_id]

    columns = COLUMNS[op.collection]
    document = op.document or {}
    # Every column is written, so omitted fields are cleared (wholesale replace).
    values = [document.get(c) for c in columns]
    assignments = sql.SQL(", ").join(
        sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c))
        for c in columns
        if c != "id"
    )
    query = sql.SQL("""
        INSERT INTO {table} (user_id, {columns})
        VALUES (%s, {placeholders})
        ON CONFLICT (id) DO UPDATE SET {assignments}
        WHERE {table}.user_id = EXCLUDED.user_id
    """).format(
        table=table,
        columns=_column_list(op.collection),
        placeholders=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        assignments=assignments,
    )
    return query, [user_id, *values]


def _row_to_document(collection: Collection, row: tuple) -> Document:
    """Convert a database row to a document, omitting NULL columns."""
    return {
        column: value
        for column, value in zip(COLUMNS[collection], row)
        if value is not None
    }
