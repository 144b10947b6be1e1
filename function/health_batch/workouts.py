"""Parsing of workouts pushed by the iOS Shortcut."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, List, Optional, Tuple

from shared.units import minutes_to_whole_minutes
from shared.validators import (
    MalformedPayloadError,
    format_utc_timestamp,
    parse_number,
    parse_timestamp,
    sanitize_text_input
)

DEFAULT_SOURCE = "Apple Watch"


@dataclass(frozen=True)
class HealthWorkout:
    """One workout entry from the batch payload."""

    type: str
    duration: float
    start_date: datetime
    calories: Optional[float] = None
    end_date: Optional[datetime] = None
    source: str = DEFAULT_SOURCE

    @property
    def duration_minutes(self) -> int:
        return minutes_to_whole_minutes(self.duration)

    @property
    def start_time(self) -> str:
        """Start timestamp as stored in Notion's Start Time property."""
        return format_utc_timestamp(self.start_date)

    def start_day(self, tz: tzinfo) -> str:
        """Calendar day of the start timestamp in ``tz``, the same zone used for "today"."""
        return self.start_date.astimezone(tz).date().isoformat()

    @property
    def dedup_key(self) -> Tuple[str, int, str]:
        return (self.type, self.duration_minutes, self.start_time)


def parse_workout(entry: Any) -> HealthWorkout:
    """
    Parse one workout entry.

    Raises:
        MalformedPayloadError: If required fields are missing or invalid
    """
    if not isinstance(entry, dict):
        raise MalformedPayloadError("workout must be a JSON object")

    workout_type = sanitize_text_input(entry.get("type"), "type", max_length=200)
    if not workout_type:
        raise MalformedPayloadError("'type' is required")

    end_date = None
    if entry.get("endDate"):
        end_date = parse_timestamp(entry.get("endDate"), "endDate")

    source = sanitize_text_input(entry.get("source"), "source", max_length=100) or DEFAULT_SOURCE

    return HealthWorkout(
        type=workout_type,
        duration=parse_number(entry.get("duration"), "duration"),
        start_date=parse_timestamp(entry.get("startDate"), "startDate"),
        calories=parse_number(entry.get("calories"), "calories", required=False),
        end_date=end_date,
        source=source,
    )


def parse_workouts(entries: List[Any]) -> List[HealthWorkout]:
    """
    Parse every entry of the batch before anything is written.

    Raises:
        MalformedPayloadError: Naming the index of the first invalid entry
    """
    workouts = []
    for index, entry in enumerate(entries):
        try:
            workouts.append(parse_workout(entry))
        except MalformedPayloadError as e:
            raise MalformedPayloadError(f"workouts[{index}]: {str(e)}")
    return workouts
