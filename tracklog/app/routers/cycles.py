"""CRUD routes for training cycles."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from tracklog.agg import list_cycles
from tracklog.app.dependencies import current_user_id, get_store, user_session
from tracklog.app.models import CycleRequest, DeleteResponse
from tracklog.app.sessions import UserSession
from tracklog.db.store import DocumentStore
from tracklog.models import Cycle
from tracklog.ops.cascade import delete_cycle
from tracklog.ops.mutations import create_cycle, update_cycle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cycles", tags=["cycles"])


@router.get("", response_model=list[Cycle])
async def read_cycles(session: UserSession = Depends(user_session)) -> list[Cycle]:
    """List cycles, earliest start first."""
    return list_cycles(session.mirror)


@router.post("", status_code=201, response_model=Cycle)
async def add_cycle(
    request: CycleRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> Cycle:
    try:
        return await create_cycle(store, user_id, request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{cycle_id}", response_model=Cycle)
async def edit_cycle(
    cycle_id: str,
    request: CycleRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> Cycle:
    try:
        cycle = await update_cycle(store, user_id, cycle_id, request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if cycle is None:
        raise HTTPException(status_code=404, detail=f"Cycle {cycle_id} not found")
    return cycle


@router.delete("/{cycle_id}", response_model=DeleteResponse)
async def remove_cycle(
    cycle_id: str,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DeleteResponse:
    """Delete a cycle and everything in it."""
    result = await delete_cycle(store, user_id, cycle_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Cycle {cycle_id} not found")
    return DeleteResponse.from_result("Cycle", result)
