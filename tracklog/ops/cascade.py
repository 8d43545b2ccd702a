"""Cascading deletes across the training hierarchy.

Deleting a cycle, workout or day entry removes everything beneath it. Each
delete runs in two phases:

1. Closure read: walk Cycle -> Workouts -> DayEntries -> SeriesSets by
   querying the remote store directly (the local mirror may be stale).
2. Batch write: delete the root and every dependent in one atomic batch.

If the batch fails nothing is deleted and a single BatchWriteError is
raised; there is no automatic retry. Documents created between the two
phases are not in the closure and are left behind.
"""

import logging
from dataclasses import dataclass, field

from tracklog.db.store import DocumentStore
from tracklog.errors import BatchWriteError
from tracklog.models import Collection, COLLECTIONS

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    """The ids removed by a cascading delete, grouped by collection."""

    root_collection: Collection
    root_id: str
    deleted: dict[Collection, list[str]] = field(
        default_factory=lambda: {name: [] for name in COLLECTIONS}
    )

    @property
    def total(self) -> int:
        return sum(len(ids) for ids in self.deleted.values())


async def delete_cycle(
    store: DocumentStore, user_id: str, cycle_id: str
) -> CascadeResult | None:
    """Delete a cycle with all its workouts, day entries and series/sets.

    Returns None if the cycle doesn't exist.

    Raises:
        BatchWriteError: If the delete batch fails. Nothing is deleted.
    """
    if await store.get(user_id, "cycles", cycle_id) is None:
        return None
    result = CascadeResult("cycles", cycle_id)
    result.deleted["cycles"].append(cycle_id)
    for workout in await store.query(user_id, "workouts", "cycle_id", cycle_id):
        await _collect_workout(store, user_id, workout["id"], result)
    await _commit(store, user_id, result)
    return result


async def delete_workout(
    store: DocumentStore, user_id: str, workout_id: str
) -> CascadeResult | None:
    """Delete a workout with all its day entries and series/sets."""
    if await store.get(user_id, "workouts", workout_id) is None:
        return None
    result = CascadeResult("workouts", workout_id)
    await _collect_workout(store, user_id, workout_id, result)
    await _commit(store, user_id, result)
    return result


async def delete_day_entry(
    store: DocumentStore, user_id: str, day_entry_id: str
) -> CascadeResult | None:
    """Delete a day entry with all its series/sets."""
    if await store.get(user_id, "dayEntries", day_entry_id) is None:
        return None
    result = CascadeResult("dayEntries", day_entry_id)
    await _collect_day_entry(store, user_id, day_entry_id, result)
    await _commit(store, user_id, result)
    return result


async def delete_series_set(
    store: DocumentStore, user_id: str, series_set_id: str
) -> CascadeResult | None:
    """Delete a single series/set. It has no dependents."""
    if await store.get(user_id, "seriesSets", series_set_id) is None:
        return None
    result = CascadeResult("seriesSets", series_set_id)
    result.deleted["seriesSets"].append(series_set_id)
    await _commit(store, user_id, result)
    return result


# --- Helpers ---


async def _collect_workout(
    store: DocumentStore, user_id: str, workout_id: str, result: CascadeResult
) -> None:
    result.deleted["workouts"].append(workout_id)
    for entry in await store.query(user_id, "dayEntries", "workout_id", workout_id):
        await _collect_day_entry(store, user_id, entry["id"], result)


async def _collect_day_entry(
    store: DocumentStore, user_id: str, day_entry_id: str, result: CascadeResult
) -> None:
    result.deleted["dayEntries"].append(day_entry_id)
    series = await store.query(user_id, "seriesSets", "day_entry_id", day_entry_id)
    result.deleted["seriesSets"].extend(doc["id"] for doc in series)


async def _commit(store: DocumentStore, user_id: str, result: CascadeResult) -> None:
    batch = store.batch(user_id)
    for name in reversed(COLLECTIONS):
        for doc_id in result.deleted[name]:
            batch.delete(name, doc_id)
    try:
        await batch.commit()
    except BatchWriteError:
        logger.error(
            f"Cascade delete of {result.root_collection} {result.root_id} failed; "
            f"no documents were deleted"
        )
        raise
    logger.info(
        f"Deleted {result.root_collection} {result.root_id} "
        f"and {result.total - 1} dependents for user {user_id}"
    )
