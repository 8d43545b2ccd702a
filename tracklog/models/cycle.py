"""Training cycles, the root of the training hierarchy."""

from datetime import date
from typing import Any

from pydantic import BaseModel


class Cycle(BaseModel):
    """A training period (e.g. a season) that owns workouts.

    `start_date <= end_date` is assumed for sorting but not enforced.
    """

    id: str
    name: str
    start_date: date
    end_date: date

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
