"""Tests for listing and filtering day entries."""

from datetime import date

import pytest

from tracklog.agg import (
    describe_series_set,
    day_entry_views,
    filter_day_entries,
    list_cycles,
    list_workouts,
    series_for,
)
from tracklog.agg.series import UNKNOWN_WORKOUT
from tests._factories import seed_mirror


@pytest.fixture
def populated(mirror, cycle_factory, workout_factory, day_entry_factory, track_set_factory, gym_set_factory):
    """Two cycles; cycle 1 has a track and a gym workout, cycle 2 has one track workout."""
    seed_mirror(
        mirror,
        cycle_factory.make({"id": "cyc_1", "start_date": date(2024, 3, 1)}),
        cycle_factory.make({"id": "cyc_2", "name": "Winter", "start_date": date(2023, 12, 1)}),
        cycle_factory.make({"id": "cyc_empty", "name": "Empty", "start_date": date(2024, 9, 1)}),
        workout_factory.make({"id": "wk_t1", "cycle_id": "cyc_1", "name": "Tempo"}),
        workout_factory.make({"id": "wk_g1", "cycle_id": "cyc_1", "name": "arms", "type": "gym"}),
        workout_factory.make({"id": "wk_t2", "cycle_id": "cyc_2", "name": "Hills"}),
        day_entry_factory.make({"id": "de_a", "workout_id": "wk_t1", "date": date(2024, 3, 5)}),
        day_entry_factory.make({"id": "de_b", "workout_id": "wk_g1", "date": date(2024, 3, 6)}),
        day_entry_factory.make({"id": "de_c", "workout_id": "wk_t2", "date": date(2023, 12, 5)}),
        day_entry_factory.make({"id": "de_d", "workout_id": "wk_t1", "date": date(2024, 3, 12)}),
        day_entry_factory.make({"id": "de_orphan", "workout_id": "wk_gone", "date": date(2024, 3, 12)}),
        track_set_factory.make({"id": "ss_2", "day_entry_id": "de_a", "index": 2, "is_last": True, "recovery_seconds": None}),
        track_set_factory.make({"id": "ss_1", "day_entry_id": "de_a", "index": 1}),
        gym_set_factory.make({"id": "ss_g", "day_entry_id": "de_b"}),
    )
    return mirror


class TestListing:
    """Test cycle and workout listings."""

    def test_cycles_by_start_date(self, populated):
        assert [c.id for c in list_cycles(populated)] == ["cyc_2", "cyc_1", "cyc_empty"]

    def test_workouts_by_name(self, populated):
        assert [w.id for w in list_workouts(populated)] == ["wk_g1", "wk_t2", "wk_t1"]

    def test_workouts_of_one_cycle(self, populated):
        assert [w.id for w in list_workouts(populated, cycle_id="cyc_1")] == ["wk_g1", "wk_t1"]

    def test_series_sorted_by_index(self, populated):
        assert [s.id for s in series_for(populated, "de_a")] == ["ss_1", "ss_2"]


class TestFilterDayEntries:
    """Test filterDayEntries semantics."""

    def test_no_filters_returns_everything_newest_first(self, populated):
        entries = filter_day_entries(populated)
        assert len(entries) == 5
        assert entries[-1].id == "de_c"

    @pytest.mark.parametrize("cycle_id", ["cyc_1", "cyc_2", "cyc_empty", "cyc_404"])
    def test_cycle_filter_matches_workout_cycle(self, populated, cycle_id):
        expected = {
            e.id
            for e in populated.day_entries()
            if (w := populated.workout(e.workout_id)) is not None and w.cycle_id == cycle_id
        }
        assert {e.id for e in filter_day_entries(populated, cycle_id=cycle_id)} == expected

    def test_cycle_without_workouts_is_empty(self, populated):
        assert filter_day_entries(populated, cycle_id="cyc_empty") == []

    def test_workout_filter(self, populated):
        assert [e.id for e in filter_day_entries(populated, workout_id="wk_t1")] == ["de_d", "de_a"]

    def test_workout_filter_takes_precedence_over_cycle(self, populated):
        entries = filter_day_entries(populated, cycle_id="cyc_1", workout_id="wk_t2")
        assert [e.id for e in entries] == ["de_c"]

    def test_workout_filter_matches_entries_of_unmirrored_workout(self, populated):
        entries = filter_day_entries(populated, cycle_id="cyc_1", workout_id="wk_gone")
        assert [e.id for e in entries] == ["de_orphan"]

    def test_type_filter_uses_workout_type(self, populated):
        assert [e.id for e in filter_day_entries(populated, type="gym")] == ["de_b"]

    def test_date_filter(self, populated):
        entries = filter_day_entries(populated, date=date(2024, 3, 12))
        assert {e.id for e in entries} == {"de_d", "de_orphan"}

    def test_filters_combine(self, populated):
        entries = filter_day_entries(
            populated, cycle_id="cyc_1", type="track", date=date(2024, 3, 12)
        )
        assert [e.id for e in entries] == ["de_d"]


class TestDescribe:
    """Test series/set summary lines."""

    def test_track_line(self, track_set_factory):
        assert describe_series_set(track_set_factory.make()) == "62.1s [rec: 3:00]"

    def test_last_track_line(self, track_set_factory):
        series = track_set_factory.make({"is_last": True, "recovery_seconds": None, "run_time": 60.8})
        assert describe_series_set(series) == "60.8s (last)"

    def test_unknown_recovery_shows_dash(self, track_set_factory):
        series = track_set_factory.make({"recovery_seconds": None, "distance_meters": None})
        assert describe_series_set(series) == "62.1s [rec: —]"

    def test_gym_line(self, gym_set_factory):
        assert describe_series_set(gym_set_factory.make()) == "5x5 @ 100kg"


class TestDayEntryViews:
    """Test the list view rows."""

    def test_rows_carry_workout_and_series(self, populated):
        views = {v.entry.id: v for v in day_entry_views(populated, cycle_id="cyc_1")}

        assert views["de_a"].workout_name == "Tempo"
        assert views["de_a"].lines == ["62.1s [rec: 3:00]", "62.1s (last)"]
        assert views["de_b"].workout_type == "gym"

    def test_missing_workout_shows_unknown(self, populated):
        views = {v.entry.id: v for v in day_entry_views(populated)}
        assert views["de_orphan"].workout_name == UNKNOWN_WORKOUT
        assert views["de_orphan"].workout_type is None
