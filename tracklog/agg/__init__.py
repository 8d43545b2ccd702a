from .series import (
    DayEntryView,
    list_cycles,
    list_workouts,
    series_for,
    filter_day_entries,
    describe_series_set,
    day_entry_view,
    day_entry_views,
)
from .progression import (
    DistanceSummary,
    ProgressionPoint,
    distinct_track_distances,
    progression_series,
)
from .warnings import day_entry_warnings

__all__ = [
    "DayEntryView",
    "list_cycles",
    "list_workouts",
    "series_for",
    "filter_day_entries",
    "describe_series_set",
    "day_entry_view",
    "day_entry_views",
    "DistanceSummary",
    "ProgressionPoint",
    "distinct_track_distances",
    "progression_series",
    "day_entry_warnings",
]
