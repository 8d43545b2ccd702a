"""Local in-memory replica of the user's collections."""

import logging
from typing import Iterable, cast

from tracklog.models import (
    Collection,
    COLLECTIONS,
    Cycle,
    DayEntry,
    Entity,
    GymSet,
    TrackSet,
    Workout,
)

logger = logging.getLogger(__name__)


class MirrorStore:
    """Collection name -> {id: entity}, replaced a whole collection at a time.

    There is no incremental patching: every snapshot swaps the collection's
    contents, so applying the same snapshot twice is harmless and a missed
    change is repaired by the next snapshot.
    """

    def __init__(self) -> None:
        self._collections: dict[Collection, dict[str, Entity]] = {
            name: {} for name in COLLECTIONS
        }
        self._loaded: set[Collection] = set()

    def replace_collection(self, name: Collection, entities: Iterable[Entity]) -> None:
        """Swap the contents of `name` for `entities`."""
        self._check_name(name)
        # Build first, then swap, so readers never see a half-filled mapping.
        replacement = {entity.id: entity for entity in entities}
        self._collections[name] = replacement
        self._loaded.add(name)
        logger.debug(f"Replaced {name} with {len(replacement)} entities")

    def all(self, name: Collection) -> list[Entity]:
        self._check_name(name)
        return list(self._collections[name].values())

    def by_id(self, name: Collection, entity_id: str) -> Entity | None:
        self._check_name(name)
        return self._collections[name].get(entity_id)

    def is_loaded(self, name: Collection) -> bool:
        """True once `name` has received at least one snapshot."""
        return name in self._loaded

    def clear(self) -> None:
        """Forget every collection."""
        self._collections = {name: {} for name in COLLECTIONS}
        self._loaded.clear()

    # Typed views of the collections.

    def cycles(self) -> list[Cycle]:
        return cast(list[Cycle], self.all("cycles"))

    def workouts(self) -> list[Workout]:
        return cast(list[Workout], self.all("workouts"))

    def day_entries(self) -> list[DayEntry]:
        return cast(list[DayEntry], self.all("dayEntries"))

    def series_sets(self) -> list[TrackSet | GymSet]:
        return cast(list[TrackSet | GymSet], self.all("seriesSets"))

    def workout(self, workout_id: str) -> Workout | None:
        return cast(Workout | None, self.by_id("workouts", workout_id))

    def day_entry(self, day_entry_id: str) -> DayEntry | None:
        return cast(DayEntry | None, self.by_id("dayEntries", day_entry_id))

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
