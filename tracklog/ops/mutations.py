"""Create and update operations.

Every function takes raw form fields, validates them (raising
`ValidationError` before anything is written) and writes the resulting
document to the remote store. Updates replace an entity's fields
wholesale and return None when the entity doesn't exist. Parent lookups go
to the store, not the mirror, which may lag behind.
"""

import logging
from typing import Sequence

from tracklog.db.store import DocumentStore
from tracklog.errors import ValidationError
from tracklog.models import (
    Collection,
    Cycle,
    DayEntry,
    GymSet,
    TrackSet,
    Workout,
    WorkoutType,
    new_id,
    series_set_adapter,
)
from .forms import (
    Fields,
    build_series_set,
    optional_text,
    required_date,
    required_text,
    whole_number,
    workout_type,
)

logger = logging.getLogger(__name__)


# --- Cycles ---


async def create_cycle(store: DocumentStore, user_id: str, fields: Fields) -> Cycle:
    cycle = Cycle(
        id=new_id("cycles"),
        name=required_text(fields, "name"),
        start_date=required_date(fields, "start_date"),
        end_date=required_date(fields, "end_date"),
    )
    await store.batch(user_id).set("cycles", cycle.to_document()).commit()
    logger.info(f"Created cycle {cycle.id} for user {user_id}")
    return cycle


async def update_cycle(
    store: DocumentStore, user_id: str, cycle_id: str, fields: Fields
) -> Cycle | None:
    if await store.get(user_id, "cycles", cycle_id) is None:
        return None
    cycle = Cycle(
        id=cycle_id,
        name=required_text(fields, "name"),
        start_date=required_date(fields, "start_date"),
        end_date=required_date(fields, "end_date"),
    )
    await store.batch(user_id).set("cycles", cycle.to_document()).commit()
    return cycle


# --- Workouts ---


async def create_workout(store: DocumentStore, user_id: str, fields: Fields) -> Workout:
    cycle_id = required_text(fields, "cycle_id")
    await _require_parent(store, user_id, "cycles", cycle_id, "cycle_id")
    workout = Workout(
        id=new_id("workouts"),
        cycle_id=cycle_id,
        name=required_text(fields, "name"),
        type=workout_type(fields),
    )
    await store.batch(user_id).set("workouts", workout.to_document()).commit()
    logger.info(f"Created {workout.type} workout {workout.id} in cycle {cycle_id}")
    return workout


async def update_workout(
    store: DocumentStore, user_id: str, workout_id: str, fields: Fields
) -> Workout | None:
    """Replace a workout's name and type (and optionally move it to another cycle).

    Changing the type doesn't touch existing series/sets; the mismatch is
    reported by the query layer instead.
    """
    existing = await store.get(user_id, "workouts", workout_id)
    if existing is None:
        return None
    cycle_id = optional_text(fields, "cycle_id") or existing["cycle_id"]
    if cycle_id != existing["cycle_id"]:
        await _require_parent(store, user_id, "cycles", cycle_id, "cycle_id")
    workout = Workout(
        id=workout_id,
        cycle_id=cycle_id,
        name=required_text(fields, "name"),
        type=workout_type(fields),
    )
    await store.batch(user_id).set("workouts", workout.to_document()).commit()
    return workout


# --- Day entries ---


async def create_day_entry(
    store: DocumentStore,
    user_id: str,
    fields: Fields,
    series: Sequence[Fields] = (),
) -> tuple[DayEntry, list[TrackSet | GymSet]]:
    """Create a day entry together with its series/sets in one batch.

    Series are indexed 1..n in the order given. A series' type defaults to
    the workout's type.
    """
    workout_id = required_text(fields, "workout_id")
    parent = await _require_parent(store, user_id, "workouts", workout_id, "workout_id")
    entry = DayEntry(
        id=new_id("dayEntries"),
        workout_id=workout_id,
        date=required_date(fields, "date"),
        notes=optional_text(fields, "notes"),
    )
    sets = _build_series_list(entry.id, parent["type"], series)

    batch = store.batch(user_id).set("dayEntries", entry.to_document())
    for series_set in sets:
        batch.set("seriesSets", series_set.to_document())
    await batch.commit()
    logger.info(f"Created day entry {entry.id} with {len(sets)} series/sets")
    return entry, sets


async def update_day_entry(
    store: DocumentStore, user_id: str, day_entry_id: str, fields: Fields
) -> DayEntry | None:
    existing = await store.get(user_id, "dayEntries", day_entry_id)
    if existing is None:
        return None
    workout_id = optional_text(fields, "workout_id") or existing["workout_id"]
    if workout_id != existing["workout_id"]:
        await _require_parent(store, user_id, "workouts", workout_id, "workout_id")
    entry = DayEntry(
        id=day_entry_id,
        workout_id=workout_id,
        date=required_date(fields, "date"),
        notes=optional_text(fields, "notes"),
    )
    await store.batch(user_id).set("dayEntries", entry.to_document()).commit()
    return entry


async def replace_series(
    store: DocumentStore,
    user_id: str,
    day_entry_id: str,
    series: Sequence[Fields],
) -> list[TrackSet | GymSet] | None:
    """Replace every series/set of a day entry, atomically.

    Returns None if the day entry doesn't exist.
    """
    entry = await store.get(user_id, "dayEntries", day_entry_id)
    if entry is None:
        return None
    workout = await store.get(user_id, "workouts", entry["workout_id"])
    default_type: WorkoutType = workout["type"] if workout else "track"
    sets = _build_series_list(day_entry_id, default_type, series)

    existing = await store.query(user_id, "seriesSets", "day_entry_id", day_entry_id)
    batch = store.batch(user_id)
    for doc in existing:
        batch.delete("seriesSets", doc["id"])
    for series_set in sets:
        batch.set("seriesSets", series_set.to_document())
    await batch.commit()
    logger.info(
        f"Replaced {len(existing)} series/sets of {day_entry_id} with {len(sets)}"
    )
    return sets


# --- Series/sets ---


async def create_series_set(
    store: DocumentStore, user_id: str, fields: Fields
) -> TrackSet | GymSet:
    """Append a series/set to a day entry.

    The index defaults to one past the entry's highest index.
    """
    day_entry_id = required_text(fields, "day_entry_id")
    entry = await _require_parent(
        store, user_id, "dayEntries", day_entry_id, "day_entry_id"
    )
    siblings = await store.query(user_id, "seriesSets", "day_entry_id", day_entry_id)
    index = _index(fields, default=max((s["index"] for s in siblings), default=0) + 1)
    series_type = await _series_type(store, user_id, entry["workout_id"], fields)
    series_set = build_series_set(
        fields,
        set_id=new_id("seriesSets"),
        day_entry_id=day_entry_id,
        index=index,
        series_type=series_type,
    )
    await store.batch(user_id).set("seriesSets", series_set.to_document()).commit()
    return series_set


async def update_series_set(
    store: DocumentStore, user_id: str, series_set_id: str, fields: Fields
) -> TrackSet | GymSet | None:
    existing = await store.get(user_id, "seriesSets", series_set_id)
    if existing is None:
        return None
    current = series_set_adapter.validate_python(existing)
    series_set = build_series_set(
        fields,
        set_id=series_set_id,
        day_entry_id=current.day_entry_id,
        index=_index(fields, default=current.index),
        series_type=workout_type(fields) if fields.get("type") else current.type,
    )
    await store.batch(user_id).set("seriesSets", series_set.to_document()).commit()
    return series_set


# --- Helpers ---


async def _require_parent(
    store: DocumentStore,
    user_id: str,
    collection: Collection,
    parent_id: str,
    field: str,
) -> dict:
    parent = await store.get(user_id, collection, parent_id)
    if parent is None:
        raise ValidationError(
            f"{field} refers to a missing entity: {parent_id}", field=field
        )
    return parent


async def _series_type(
    store: DocumentStore, user_id: str, workout_id: str, fields: Fields
) -> WorkoutType:
    if fields.get("type"):
        return workout_type(fields)
    workout = await store.get(user_id, "workouts", workout_id)
    return workout["type"] if workout else "track"


def _index(fields: Fields, default: int) -> int:
    value = fields.get("index")
    if value is None or value == "":
        return default
    return whole_number(value, "index")


def _build_series_list(
    day_entry_id: str, default_type: WorkoutType, series: Sequence[Fields]
) -> list[TrackSet | GymSet]:
    return [
        build_series_set(
            fields,
            set_id=new_id("seriesSets"),
            day_entry_id=day_entry_id,
            index=position,
            series_type=workout_type(fields) if fields.get("type") else default_type,
        )
        for position, fields in enumerate(series, start=1)
    ]
