"""Lazily computed referential warnings.

These flag data the user should look at (a workout whose type no longer
matches its entries, track intervals without a distance) without blocking
anything or changing the data.
"""

from tracklog.models import ReferentialWarning, TrackSet
from tracklog.sync.mirror import MirrorStore


def day_entry_warnings(mirror: MirrorStore, day_entry_id: str) -> list[ReferentialWarning]:
    """Warnings for one day entry, computed from the mirror's current contents."""
    entry = mirror.day_entry(day_entry_id)
    if entry is None:
        return []
    series = sorted(
        (s for s in mirror.series_sets() if s.day_entry_id == day_entry_id),
        key=lambda s: s.index,
    )
    warnings: list[ReferentialWarning] = []

    series_types = sorted({s.type for s in series})
    if len(series_types) > 1:
        warnings.append(
            ReferentialWarning(
                kind="mixed_series_types",
                day_entry_id=day_entry_id,
                message=f"Entries mix {' and '.join(series_types)} series.",
            )
        )

    workout = mirror.workout(entry.workout_id)
    if workout is not None:
        for series_type in series_types:
            if series_type != workout.type:
                warnings.append(
                    ReferentialWarning(
                        kind="type_mismatch",
                        day_entry_id=day_entry_id,
                        message=(
                            f"Workout type is '{workout.type}', "
                            f"but entries are for '{series_type}'. Please edit."
                        ),
                    )
                )

    for s in series:
        if isinstance(s, TrackSet) and s.is_legacy:
            warnings.append(
                ReferentialWarning(
                    kind="legacy_distance",
                    day_entry_id=day_entry_id,
                    series_set_id=s.id,
                    message=f"Series {s.index} has no distance recorded.",
                )
            )
    return warnings
