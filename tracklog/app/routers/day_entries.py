"""Routes for day entries and their series/sets."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tracklog.agg import DayEntryView, day_entry_view, day_entry_views
from tracklog.app.dependencies import current_user_id, get_store, user_session
from tracklog.app.models import DayEntryRequest, DeleteResponse, ReplaceSeriesRequest
from tracklog.app.sessions import UserSession
from tracklog.db.store import DocumentStore
from tracklog.models import DayEntry, GymSet, TrackSet, WorkoutType
from tracklog.ops.cascade import delete_day_entry
from tracklog.ops.mutations import create_day_entry, replace_series, update_day_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/day-entries", tags=["day-entries"])


class DayEntryResponse(BaseModel):
    entry: DayEntry
    series: list[TrackSet | GymSet]


@router.get("", response_model=list[DayEntryView])
async def read_day_entries(
    cycle_id: Optional[str] = None,
    workout_id: Optional[str] = None,
    date: Optional[date] = None,
    type: Optional[WorkoutType] = None,
    session: UserSession = Depends(user_session),
) -> list[DayEntryView]:
    """List day entries, newest first. Filters combine with AND."""
    return day_entry_views(
        session.mirror, cycle_id=cycle_id, workout_id=workout_id, date=date, type=type
    )


@router.get("/{day_entry_id}", response_model=DayEntryView)
async def read_day_entry(
    day_entry_id: str,
    session: UserSession = Depends(user_session),
) -> DayEntryView:
    entry = session.mirror.day_entry(day_entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Day entry {day_entry_id} not found")
    return day_entry_view(session.mirror, entry)


@router.post("", status_code=201, response_model=DayEntryResponse)
async def add_day_entry(
    request: DayEntryRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DayEntryResponse:
    """Create a day entry together with its series/sets."""
    fields = request.model_dump(exclude={"series"})
    series = [s.model_dump(exclude_none=True) for s in request.series]
    try:
        entry, sets = await create_day_entry(store, user_id, fields, series)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DayEntryResponse(entry=entry, series=sets)


@router.put("/{day_entry_id}", response_model=DayEntry)
async def edit_day_entry(
    day_entry_id: str,
    request: DayEntryRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DayEntry:
    """Replace a day entry's date and notes. Series are left alone."""
    try:
        entry = await update_day_entry(
            store, user_id, day_entry_id, request.model_dump(exclude={"series"})
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Day entry {day_entry_id} not found")
    return entry


@router.put("/{day_entry_id}/series", response_model=list[TrackSet | GymSet])
async def edit_day_entry_series(
    day_entry_id: str,
    request: ReplaceSeriesRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> list[TrackSet | GymSet]:
    """Replace all series/sets of a day entry in one write."""
    series = [s.model_dump(exclude_none=True) for s in request.series]
    try:
        sets = await replace_series(store, user_id, day_entry_id, series)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if sets is None:
        raise HTTPException(status_code=404, detail=f"Day entry {day_entry_id} not found")
    return sets


@router.delete("/{day_entry_id}", response_model=DeleteResponse)
async def remove_day_entry(
    day_entry_id: str,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DeleteResponse:
    result = await delete_day_entry(store, user_id, day_entry_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Day entry {day_entry_id} not found")
    return DeleteResponse.from_result("Day entry", result)
