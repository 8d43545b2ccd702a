"""Listing and filtering over the local mirror.

Everything here reads the MirrorStore only, so it is synchronous and has no
side effects.
"""

from datetime import date

from pydantic import BaseModel

from tracklog.models import (
    Cycle,
    DayEntry,
    GymSet,
    ReferentialWarning,
    TrackSet,
    Workout,
    WorkoutType,
)
from tracklog.sync.mirror import MirrorStore
from tracklog.utils.recovery import format_recovery_for_display
from .warnings import day_entry_warnings

UNKNOWN_WORKOUT = "Unknown"


class DayEntryView(BaseModel):
    """A day entry with what a list view needs to show it."""

    entry: DayEntry
    workout_name: str
    workout_type: WorkoutType | None = None
    series: list[TrackSet | GymSet]
    lines: list[str]
    warnings: list[ReferentialWarning]


def list_cycles(mirror: MirrorStore) -> list[Cycle]:
    """All cycles, earliest start first."""
    return sorted(mirror.cycles(), key=lambda c: (c.start_date, c.end_date, c.name))


def list_workouts(mirror: MirrorStore, cycle_id: str | None = None) -> list[Workout]:
    """Workouts, optionally restricted to one cycle, sorted by name."""
    workouts = mirror.workouts()
    if cycle_id is not None:
        workouts = [w for w in workouts if w.cycle_id == cycle_id]
    return sorted(workouts, key=lambda w: w.name.lower())


def series_for(mirror: MirrorStore, day_entry_id: str) -> list[TrackSet | GymSet]:
    """Series/sets of a day entry in display order."""
    series = [s for s in mirror.series_sets() if s.day_entry_id == day_entry_id]
    return sorted(series, key=lambda s: s.index)


def filter_day_entries(
    mirror: MirrorStore,
    cycle_id: str | None = None,
    workout_id: str | None = None,
    date: date | None = None,
    type: WorkoutType | None = None,
) -> list[DayEntry]:
    """Day entries matching every given filter, newest first.

    Args:
        cycle_id: Entries of any workout in this cycle. Ignored when
            `workout_id` is given.
        workout_id: Entries of this workout.
        date: Entries on exactly this date.
        type: Entries whose *workout* has this type (series types are not
            consulted).

    An entry whose workout is missing from the mirror matches neither
    `cycle_id` nor `type`.
    """
    workouts = {w.id: w for w in mirror.workouts()}
    entries = mirror.day_entries()

    if workout_id is not None:
        entries = [e for e in entries if e.workout_id == workout_id]
    elif cycle_id is not None:
        entries = [
            e
            for e in entries
            if e.workout_id in workouts and workouts[e.workout_id].cycle_id == cycle_id
        ]
    if type is not None:
        entries = [
            e
            for e in entries
            if e.workout_id in workouts and workouts[e.workout_id].type == type
        ]
    if date is not None:
        entries = [e for e in entries if e.date == date]

    return sorted(entries, key=lambda e: e.date, reverse=True)


def describe_series_set(series_set: TrackSet | GymSet) -> str:
    """One-line summary, e.g. "62.1s [rec: 3:00]", "60.8s (last)", "5x5 @ 100kg"."""
    match series_set:
        case TrackSet():
            text = f"{series_set.run_time:g}s"
            if series_set.is_last:
                return f"{text} (last)"
            recovery = format_recovery_for_display(series_set.recovery_seconds)
            return f"{text} [rec: {recovery}]"
        case GymSet():
            return f"{series_set.reps} @ {series_set.weight}"


def day_entry_views(
    mirror: MirrorStore,
    cycle_id: str | None = None,
    workout_id: str | None = None,
    date: date | None = None,
    type: WorkoutType | None = None,
) -> list[DayEntryView]:
    """Filtered day entries, newest first, with series and warnings attached."""
    return [
        day_entry_view(mirror, entry)
        for entry in filter_day_entries(
            mirror, cycle_id=cycle_id, workout_id=workout_id, date=date, type=type
        )
    ]


def day_entry_view(mirror: MirrorStore, entry: DayEntry) -> DayEntryView:
    workout = mirror.workout(entry.workout_id)
    series = series_for(mirror, entry.id)
    return DayEntryView(
        entry=entry,
        workout_name=workout.name if workout else UNKNOWN_WORKOUT,
        workout_type=workout.type if workout else None,
        series=series,
        lines=[describe_series_set(s) for s in series],
        warnings=day_entry_warnings(mirror, entry.id),
    )
