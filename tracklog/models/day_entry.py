from datetime import date
from typing import Any

from pydantic import BaseModel


class DayEntry(BaseModel):
    """One dated occurrence of a workout, holding notes and series/sets."""

    id: str
    workout_id: str
    date: date
    notes: str = ""

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
