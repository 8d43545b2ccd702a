"""Factories for creating training log test data."""

from typing import Any, Mapping
from datetime import date

from tracklog.db.memory import InMemoryStore
from tracklog.models import (
    Collection,
    Cycle,
    DayEntry,
    Entity,
    GymSet,
    TrackSet,
    Workout,
)
from tracklog.sync.mirror import MirrorStore


class CycleFactory:
    """Factory for creating Cycle test instances."""

    def __init__(self):
        self.default = Cycle(
            id="cyc_1",
            name="Spring Block",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 5, 31),
        )

    def make(self, update: Mapping[str, Any] | None = None) -> Cycle:
        return self.default.model_copy(deep=True, update=update)


class WorkoutFactory:
    """Factory for creating Workout test instances."""

    def __init__(self):
        self.default = Workout(
            id="wk_1",
            cycle_id="cyc_1",
            name="Tuesday Intervals",
            type="track",
        )

    def make(self, update: Mapping[str, Any] | None = None) -> Workout:
        return self.default.model_copy(deep=True, update=update)


class DayEntryFactory:
    """Factory for creating DayEntry test instances."""

    def __init__(self):
        self.default = DayEntry(
            id="de_1",
            workout_id="wk_1",
            date=date(2024, 3, 5),
            notes="",
        )

    def make(self, update: Mapping[str, Any] | None = None) -> DayEntry:
        return self.default.model_copy(deep=True, update=update)


class TrackSetFactory:
    """Factory for creating TrackSet test instances."""

    def __init__(self):
        self.default = TrackSet(
            id="ss_1",
            day_entry_id="de_1",
            index=1,
            run_time=62.1,
            distance_meters=400,
            recovery_seconds=180,
            is_last=False,
        )

    def make(self, update: Mapping[str, Any] | None = None) -> TrackSet:
        return self.default.model_copy(deep=True, update=update)


class GymSetFactory:
    """Factory for creating GymSet test instances."""

    def __init__(self):
        self.default = GymSet(
            id="ss_g1",
            day_entry_id="de_1",
            index=1,
            reps="5x5",
            weight="100kg",
        )

    def make(self, update: Mapping[str, Any] | None = None) -> GymSet:
        return self.default.model_copy(deep=True, update=update)


def collection_of(entity: Entity) -> Collection:
    match entity:
        case Cycle():
            return "cycles"
        case Workout():
            return "workouts"
        case DayEntry():
            return "dayEntries"
        case TrackSet() | GymSet():
            return "seriesSets"
    raise TypeError(f"Not an entity: {entity!r}")


def seed_store(store: InMemoryStore, user_id: str, *entities: Entity) -> None:
    """Write entities straight into an in-memory store."""
    batch = store.batch(user_id)
    for entity in entities:
        batch.set(collection_of(entity), entity.to_document())
    store.apply(batch)


def seed_mirror(mirror: MirrorStore, *entities: Entity) -> None:
    """Load entities into a mirror, replacing each touched collection."""
    grouped: dict[Collection, list[Entity]] = {}
    for entity in entities:
        grouped.setdefault(collection_of(entity), []).append(entity)
    for name, members in grouped.items():
        mirror.replace_collection(name, members)
