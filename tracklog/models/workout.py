from typing import Any, Literal

from pydantic import BaseModel

WorkoutType = Literal["track", "gym"]


class Workout(BaseModel):
    """A named recurring session within a cycle."""

    id: str
    cycle_id: str  # Maintained by cascade delete only, no foreign key
    name: str
    type: WorkoutType

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
