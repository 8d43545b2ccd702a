"""Series and sets recorded within a day entry.

A series/set is either a track interval or a gym set, tagged by `type`.
Consumers should match on the concrete class (or the tag) rather than check
for optional fields.
"""

from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, Field, TypeAdapter, model_validator


class TrackSet(BaseModel):
    """A timed running interval.

    Records created before distance tracking existed have no
    `distance_meters`; it is left as None and never coerced to 0.
    """

    id: str
    day_entry_id: str
    index: int
    type: Literal["track"] = "track"
    run_time: float  # seconds
    distance_meters: float | None = None
    recovery_seconds: int | None = None
    is_last: bool = False

    @model_validator(mode="after")
    def drop_recovery_after_last(self) -> Self:
        # No recovery follows the final interval.
        if self.is_last:
            self.recovery_seconds = None
        return self

    @property
    def is_legacy(self) -> bool:
        """True if this interval predates distance tracking."""
        return self.distance_meters is None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class GymSet(BaseModel):
    """A lifting set. Reps and weight are free text ("5x5", "100kg")."""

    id: str
    day_entry_id: str
    index: int
    type: Literal["gym"] = "gym"
    reps: str
    weight: str = ""

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


SeriesSet = Annotated[TrackSet | GymSet, Field(discriminator="type")]

series_set_adapter: TypeAdapter[TrackSet | GymSet] = TypeAdapter(SeriesSet)
