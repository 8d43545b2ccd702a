"""Progression analysis over track intervals."""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tracklog.agg import DistanceSummary, distinct_track_distances, progression_series
from tracklog.app.dependencies import user_session
from tracklog.app.sessions import UserSession

router = APIRouter(prefix="/progression", tags=["progression"])


class ProgressionPointResponse(BaseModel):
    date: date
    run_time: float
    recovery_seconds: int | None = None
    workout_name: str


@router.get("/distances", response_model=DistanceSummary)
async def read_distances(session: UserSession = Depends(user_session)) -> DistanceSummary:
    """Distinct track distances, plus the count of intervals with no distance."""
    return distinct_track_distances(session.mirror)


@router.get("/{distance}", response_model=list[ProgressionPointResponse])
async def read_progression(
    distance: float,
    session: UserSession = Depends(user_session),
) -> list[ProgressionPointResponse]:
    """Every interval run at `distance` meters, oldest first."""
    return [
        ProgressionPointResponse(**point._asdict())
        for point in progression_series(session.mirror, distance)
    ]
