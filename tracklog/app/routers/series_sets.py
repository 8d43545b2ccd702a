"""Routes for individual series/sets."""

from fastapi import APIRouter, Depends, HTTPException

from tracklog.app.dependencies import current_user_id, get_store
from tracklog.app.models import DeleteResponse, SeriesSetRequest
from tracklog.db.store import DocumentStore
from tracklog.models import GymSet, TrackSet
from tracklog.ops.cascade import delete_series_set
from tracklog.ops.mutations import create_series_set, update_series_set

router = APIRouter(prefix="/series-sets", tags=["series-sets"])


@router.post("", status_code=201, response_model=TrackSet | GymSet)
async def add_series_set(
    request: SeriesSetRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> TrackSet | GymSet:
    try:
        return await create_series_set(store, user_id, request.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{series_set_id}", response_model=TrackSet | GymSet)
async def edit_series_set(
    series_set_id: str,
    request: SeriesSetRequest,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> TrackSet | GymSet:
    try:
        series_set = await update_series_set(
            store, user_id, series_set_id, request.model_dump(exclude_none=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if series_set is None:
        raise HTTPException(
            status_code=404, detail=f"Series/set {series_set_id} not found"
        )
    return series_set


@router.delete("/{series_set_id}", response_model=DeleteResponse)
async def remove_series_set(
    series_set_id: str,
    user_id: str = Depends(current_user_id),
    store: DocumentStore = Depends(get_store),
) -> DeleteResponse:
    result = await delete_series_set(store, user_id, series_set_id)
    if result is None:
        raise HTTPException(
            status_code=404, detail=f"Series/set {series_set_id} not found"
        )
    return DeleteResponse.from_result("Series/set", result)
