"""Tests for the local mirror."""

import pytest

from tracklog.sync.mirror import MirrorStore


class TestReplaceCollection:
    """Test whole-collection replacement."""

    def test_replace_then_lookup(self, mirror, cycle_factory):
        cycle = cycle_factory.make()
        mirror.replace_collection("cycles", [cycle])

        assert mirror.by_id("cycles", "cyc_1") == cycle
        assert mirror.all("cycles") == [cycle]
        assert mirror.cycles() == [cycle]

    def test_replacement_drops_missing_entities(self, mirror, workout_factory):
        mirror.replace_collection(
            "workouts",
            [workout_factory.make({"id": "wk_a"}), workout_factory.make({"id": "wk_b"})],
        )
        mirror.replace_collection("workouts", [workout_factory.make({"id": "wk_b"})])

        assert mirror.by_id("workouts", "wk_a") is None
        assert [w.id for w in mirror.workouts()] == ["wk_b"]

    def test_replacing_twice_is_idempotent(self, mirror, day_entry_factory):
        entries = [day_entry_factory.make({"id": f"de_{i}"}) for i in range(3)]
        mirror.replace_collection("dayEntries", entries)
        first = mirror.day_entries()
        mirror.replace_collection("dayEntries", entries)

        assert mirror.day_entries() == first

    def test_other_collections_untouched(self, mirror, cycle_factory, workout_factory):
        mirror.replace_collection("cycles", [cycle_factory.make()])
        mirror.replace_collection("workouts", [workout_factory.make()])
        mirror.replace_collection("cycles", [])

        assert mirror.cycles() == []
        assert len(mirror.workouts()) == 1

    def test_unknown_collection(self, mirror):
        with pytest.raises(KeyError):
            mirror.replace_collection("shoes", [])  # type: ignore[arg-type]
        with pytest.raises(KeyError):
            mirror.all("shoes")  # type: ignore[arg-type]


class TestLoadedState:
    """Test is_loaded and clear."""

    def test_loaded_after_first_snapshot(self):
        mirror = MirrorStore()
        assert not mirror.is_loaded("seriesSets")
        mirror.replace_collection("seriesSets", [])
        assert mirror.is_loaded("seriesSets")

    def test_clear_forgets_everything(self, mirror, cycle_factory):
        mirror.replace_collection("cycles", [cycle_factory.make()])
        mirror.clear()

        assert mirror.cycles() == []
        assert not mirror.is_loaded("cycles")
