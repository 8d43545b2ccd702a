"""CRUD routes for workouts."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from tracklog.agg import list_workouts
from tracklog.app.dependencies import current_user_id, get_store, user_session
from tracklog.app.models import DeleteResponse, WorkoutRequest
from tracklog.app.sessions import UserSession
from tracklog.db.store import DocumentStore
from tracklog.models import Workout
from tracklog.ops.cascade import delete_workout
from tracklog.ops.mutations import create_workout, update_workout

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=list[Workout])
async def read_workouts(
    cycle_id: Optional[str] = None,
    session: UserSession = Depends(user_session),
) -> list[Workout]:
    return list_workouts(session.mirror, cycle_id=cycle_id)


@router.post("", status_code=201, response_model=Workout)
async def add_workout(
    request: WorkoutRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> Workout:
    try:
        return await create_workout(store, user_id, request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{workout_id}", response_model=Workout)
async def edit_workout(
    workout_id: str,
    request: WorkoutRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> Workout:
    """Replace a workout's name and type.

    Existing entries keep their series types; mismatches show up as warnings.
    """
    try:
        workout = await update_workout(store, user_id, workout_id, request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if workout is None:
        raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    return workout


@router.delete("/{workout_id}", response_model=DeleteResponse)
async def remove_workout(
    workout_id: str,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DeleteResponse:
    """Delete a workout and its entries."""
    result = await delete_workout(store, user_id, workout_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    return DeleteResponse.from_result("Workout", result)
