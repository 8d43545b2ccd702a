from .training import (
    CycleFactory,
    WorkoutFactory,
    DayEntryFactory,
    TrackSetFactory,
    GymSetFactory,
    collection_of,
    seed_store,
    seed_mirror,
)

__all__ = [
    "CycleFactory",
    "WorkoutFactory",
    "DayEntryFactory",
    "TrackSetFactory",
    "GymSetFactory",
    "collection_of",
    "seed_store",
    "seed_mirror",
]
