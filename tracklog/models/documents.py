"""Collection names, id generation and document parsing.

The store holds four flat collections per user. Documents are plain dicts
of an entity's fields; nothing is nested.
"""

import uuid
from typing import Any, Literal

from .cycle import Cycle
from .workout import Workout
from .day_entry import DayEntry
from .series_set import TrackSet, GymSet, series_set_adapter

Collection = Literal["cycles", "workouts", "dayEntries", "seriesSets"]

# Parents before children.
COLLECTIONS: tuple[Collection, ...] = ("cycles", "workouts", "dayEntries", "seriesSets")

Entity = Cycle | Workout | DayEntry | TrackSet | GymSet

ID_PREFIXES: dict[Collection, str] = {
    "cycles": "cyc",
    "workouts": "wk",
    "dayEntries": "de",
    "seriesSets": "ss",
}


def new_id(collection: Collection) -> str:
    """Generate a fresh id for a document in `collection`."""
    return f"{ID_PREFIXES[collection]}_{uuid.uuid4()}"


def parse_document(collection: Collection, doc: dict[str, Any]) -> Entity:
    """Convert a stored document into its entity model.

    Raises:
        pydantic.ValidationError: If the document doesn't match the model.
    """
    match collection:
        case "cycles":
            return Cycle.model_validate(doc)
        case "workouts":
            return Workout.model_validate(doc)
        case "dayEntries":
            return DayEntry.model_validate(doc)
        case "seriesSets":
            return series_set_adapter.validate_python(doc)
        case _:
            raise ValueError(f"Unknown collection: {collection}")
