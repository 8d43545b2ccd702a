from .cycles import router as cycles_router
from .workouts import router as workouts_router
from .day_entries import router as day_entries_router
from .series_sets import router as series_sets_router
from .progression import router as progression_router
from .session import router as session_router

__all__ = [
    "cycles_router",
    "workouts_router",
    "day_entries_router",
    "series_sets_router",
    "progression_router",
    "session_router",
]
