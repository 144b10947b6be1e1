"""Unit conversions used when building Notion records."""

import math
from typing import Optional

SECONDS_PER_MINUTE = 60
METERS_PER_KILOMETER = 1000


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def minutes_to_whole_minutes(minutes: float) -> int:
    return round_half_up(minutes)


def seconds_to_whole_minutes(seconds: float) -> int:
    return round_half_up(seconds / SECONDS_PER_MINUTE)


def meters_to_kilometers(meters: Optional[float]) -> float:
    """Convert meters to kilometers rounded to 2 decimals; missing distance is 0."""
    if not meters:
        return 0
    return round(meters / METERS_PER_KILOMETER, 2)


def calories_to_int(calories: Optional[float]) -> int:
    if not calories:
        return 0
    return round_half_up(calories)
