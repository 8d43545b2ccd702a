"""Request and response models shared by the routers.

Request fields are raw form values: strings exactly as typed, validated by
the mutation layer rather than here.
"""

from pydantic import BaseModel

from tracklog.ops.cascade import CascadeResult
from .env_loader import EnvironmentName


class CycleRequest(BaseModel):
    name: str = ""
    start_date: str = ""
    end_date: str = ""


class WorkoutRequest(BaseModel):
    cycle_id: str = ""
    name: str = ""
    type: str = ""


class SeriesFields(BaseModel):
    """One series/set card. Track cards use run_time..is_last, gym cards reps/weight."""

    type: str = ""
    index: int | None = None
    run_time: str | float | None = None
    distance_meters: str | float | None = None
    recovery: str | None = None  # typed as "3:30" or "330"
    recovery_seconds: int | None = None
    is_last: bool | str = False
    reps: str = ""
    weight: str = ""


class DayEntryRequest(BaseModel):
    workout_id: str = ""
    date: str = ""
    notes: str = ""
    series: list[SeriesFields] = []


class SeriesSetRequest(SeriesFields):
    day_entry_id: str = ""


class ReplaceSeriesRequest(BaseModel):
    series: list[SeriesFields]


class ActiveViewRequest(BaseModel):
    view: str


class DeleteResponse(BaseModel):
    message: str
    deleted_count: int
    deleted: dict[str, list[str]]

    @classmethod
    def from_result(cls, label: str, result: CascadeResult) -> "DeleteResponse":
        return cls(
            message=f"{label} {result.root_id} deleted",
            deleted_count=result.total,
            deleted={name: ids for name, ids in result.deleted.items() if ids},
        )


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
