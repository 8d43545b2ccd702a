"""Advisory warnings about data that is inconsistent but still usable."""

from typing import Literal

from pydantic import BaseModel

WarningKind = Literal["type_mismatch", "mixed_series_types", "legacy_distance"]


class ReferentialWarning(BaseModel):
    """A non-blocking problem surfaced to the view, never auto-corrected."""

    kind: WarningKind
    day_entry_id: str
    series_set_id: str | None = None
    message: str
