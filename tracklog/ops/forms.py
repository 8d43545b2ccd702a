"""Validation of raw form-field values.

Forms hand us strings (and the occasional checkbox bool) exactly as the
user typed them. Everything here either returns a clean value or raises
`ValidationError` naming the field, so bad input never reaches the store.
"""

import math
from datetime import date
from typing import Any, Mapping

from tracklog.errors import ValidationError
from tracklog.models import GymSet, TrackSet, WorkoutType
from tracklog.utils.recovery import parse_recovery

Fields = Mapping[str, Any]

# Bounds of the INT columns that hold indexes and recovery.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_TRUTHY = {"on", "true", "1", "yes", "checked"}

_LABELS = {
    "name": "Name",
    "start_date": "Start date",
    "end_date": "End date",
    "cycle_id": "Cycle",
    "workout_id": "Workout",
    "day_entry_id": "Day entry",
    "date": "Date",
    "type": "Type",
    "run_time": "Running time",
    "reps": "Reps",
}


def required_text(fields: Fields, name: str) -> str:
    value = fields.get(name)
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{_LABELS.get(name, name)} is required", field=name)
    return text


def optional_text(fields: Fields, name: str) -> str:
    value = fields.get(name)
    return "" if value is None else str(value).strip()


def required_date(fields: Fields, name: str) -> date:
    text = required_text(fields, name)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(
            f"{_LABELS.get(name, name)} must be a date (YYYY-MM-DD), got '{text}'",
            field=name,
        )


def workout_type(fields: Fields, name: str = "type") -> WorkoutType:
    text = required_text(fields, name).lower()
    if text == "track":
        return "track"
    if text == "gym":
        return "gym"
    raise ValidationError(f"Type must be 'track' or 'gym', got '{text}'", field=name)


def checkbox(fields: Fields, name: str) -> bool:
    value = fields.get(name)
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def _number(fields: Fields, name: str, required: bool) -> float | None:
    value = fields.get(name)
    text = "" if value is None else str(value).strip()
    if not text:
        if required:
            raise ValidationError(f"{_LABELS.get(name, name)} is required", field=name)
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got '{text}'", field=name)
    try:
        number = float(value) if isinstance(value, (int, float)) else float(text)
    except (ValueError, OverflowError):
        raise ValidationError(f"{name} must be a number, got '{text}'", field=name)
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number, got '{text}'", field=name)
    return number


def whole_number(
    value: Any, name: str, minimum: int = INT_MIN, maximum: int = INT_MAX
) -> int:
    """Read an integer that fits a 32-bit column.

    Integral floats ("3.0", 3.0) are accepted; fractional ones are not.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a whole number, got '{value}'", field=name)
    if isinstance(value, int):
        number = value
    else:
        try:
            as_float = float(str(value).strip())
        except (TypeError, ValueError):
            raise ValidationError(
                f"{name} must be a whole number, got '{value}'", field=name
            )
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise ValidationError(
                f"{name} must be a whole number, got '{value}'", field=name
            )
        number = int(as_float)
    if number < minimum or number > maximum:
        raise ValidationError(
            f"{name} must be between {minimum} and {maximum}, got {number}", field=name
        )
    return number


def recovery_seconds(fields: Fields) -> int | None:
    """Read recovery from either typed text ("recovery") or raw seconds."""
    raw_seconds = fields.get("recovery_seconds")
    if raw_seconds is not None and raw_seconds != "":
        return whole_number(raw_seconds, "recovery_seconds", minimum=0)
    text = fields.get("recovery")
    if text is None:
        return None
    seconds = parse_recovery(str(text))
    if seconds is not None and seconds > INT_MAX:
        raise ValidationError(f"recovery is too long, got '{text}'", field="recovery")
    return seconds


def build_series_set(
    fields: Fields,
    *,
    set_id: str,
    day_entry_id: str,
    index: int,
    series_type: WorkoutType,
) -> TrackSet | GymSet:
    """Build a series/set of `series_type` from form fields.

    Raises:
        ValidationError: If a required field is empty or malformed.
    """
    match series_type:
        case "track":
            run_time = _number(fields, "run_time", required=True)
            distance = _number(fields, "distance_meters", required=False)
            if distance is not None and distance <= 0:
                raise ValidationError(
                    "distance_meters must be positive", field="distance_meters"
                )
            is_last = checkbox(fields, "is_last")
            return TrackSet(
                id=set_id,
                day_entry_id=day_entry_id,
                index=index,
                run_time=run_time,
                distance_meters=distance,
                recovery_seconds=None if is_last else recovery_seconds(fields),
                is_last=is_last,
            )
        case "gym":
            return GymSet(
                id=set_id,
                day_entry_id=day_entry_id,
                index=index,
                reps=required_text(fields, "reps"),
                weight=optional_text(fields, "weight"),
            )
