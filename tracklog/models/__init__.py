from .cycle import Cycle
from .workout import Workout, WorkoutType
from .day_entry import DayEntry
from .series_set import TrackSet, GymSet, SeriesSet, series_set_adapter
from .warnings import ReferentialWarning, WarningKind
from .documents import (
    Collection,
    COLLECTIONS,
    Entity,
    new_id,
    parse_document,
)

__all__ = [
    "Cycle",
    "Workout",
    "WorkoutType",
    "DayEntry",
    "TrackSet",
    "GymSet",
    "SeriesSet",
    "series_set_adapter",
    "ReferentialWarning",
    "WarningKind",
    "Collection",
    "COLLECTIONS",
    "Entity",
    "new_id",
    "parse_document",
]
