from datetime import date
from typing import NamedTuple

from pydantic import BaseModel

from tracklog.models import TrackSet
from tracklog.sync.mirror import MirrorStore
from .series import UNKNOWN_WORKOUT


class DistanceSummary(BaseModel):
    """Distances run on the track, plus how many intervals lack one."""

    distances: list[float]
    legacy_count: int


class ProgressionPoint(NamedTuple):
    date: date
    run_time: float
    recovery_seconds: int | None
    workout_name: str


def _track_sets(mirror: MirrorStore) -> list[TrackSet]:
    return [s for s in mirror.series_sets() if isinstance(s, TrackSet)]


def distinct_track_distances(mirror: MirrorStore) -> DistanceSummary:
    """Every distinct recorded track distance, ascending.

    Intervals without a distance (legacy records) are counted rather than
    treated as 0.
    """
    distances: set[float] = set()
    legacy_count = 0
    for s in _track_sets(mirror):
        if s.distance_meters is None:
            legacy_count += 1
        else:
            distances.add(s.distance_meters)
    return DistanceSummary(distances=sorted(distances), legacy_count=legacy_count)


def progression_series(mirror: MirrorStore, distance: float) -> list[ProgressionPoint]:
    """Every interval run at `distance`, oldest first.

    Intervals whose day entry isn't in the mirror (yet) are skipped. Points on
    the same date have no particular order.
    """
    points: list[ProgressionPoint] = []
    for s in _track_sets(mirror):
        if s.distance_meters is None or s.distance_meters != distance:
            continue
        entry = mirror.day_entry(s.day_entry_id)
        if entry is None:
            continue
        workout = mirror.workout(entry.workout_id)
        points.append(
            ProgressionPoint(
                date=entry.date,
                run_time=s.run_time,
                recovery_seconds=s.recovery_seconds,
                workout_name=workout.name if workout else UNKNOWN_WORKOUT,
            )
        )
    return sorted(points, key=lambda p: p.date)
