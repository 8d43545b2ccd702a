import pytest
from tracklog.app import env_loader  # noqa: F401

from tracklog.db.memory import InMemoryStore
from tracklog.sync.mirror import MirrorStore
from ._factories import (
    CycleFactory,
    WorkoutFactory,
    DayEntryFactory,
    TrackSetFactory,
    GymSetFactory,
)


class AccidentalDatabaseAccessError(Exception):
    """Raised when a unit test accidentally tries to access the database."""

    pass


def _raise_db_access_error(*args, **kwargs):
    """Raise an error when DB access is attempted in unit tests."""
    raise AccidentalDatabaseAccessError(
        "Unit test attempted to connect to the database! "
        "Either mock the database call with "
        "@patch('tracklog.db.postgres.get_async_db_cursor') or similar, "
        "or mark this test as @pytest.mark.e2e if it requires real DB access."
    )


@pytest.fixture(autouse=True)
def prevent_db_access_in_unit_tests(request, monkeypatch):
    """Prevent accidental database access in unit tests.

    For e2e tests (marked with @pytest.mark.e2e) this does nothing. For all
    other tests, psycopg's connect functions are patched to raise a clear
    error if any code path tries to reach the database without mocking.
    """
    markers = [marker.name for marker in request.node.iter_markers()]
    if "e2e" in markers:
        yield
        return

    monkeypatch.setattr("psycopg.connect", _raise_db_access_error)
    monkeypatch.setattr("psycopg.AsyncConnection.connect", _raise_db_access_error)
    yield


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def mirror() -> MirrorStore:
    return MirrorStore()


@pytest.fixture(scope="session")
def cycle_factory() -> CycleFactory:
    return CycleFactory()


@pytest.fixture(scope="session")
def workout_factory() -> WorkoutFactory:
    return WorkoutFactory()


@pytest.fixture(scope="session")
def day_entry_factory() -> DayEntryFactory:
    return DayEntryFactory()


@pytest.fixture(scope="session")
def track_set_factory() -> TrackSetFactory:
    return TrackSetFactory()


@pytest.fixture(scope="session")
def gym_set_factory() -> GymSetFactory:
    return GymSetFactory()
