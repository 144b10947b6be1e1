"""Keyword based mapping of free-text activity types to workout categories."""

from typing import Optional

YOGA = "Yoga"
LIFTING = "Lifting"
CARDIO = "Cardio"
OTHER = "Other"

WORKOUT_CATEGORIES = (YOGA, LIFTING, CARDIO, OTHER)

YOGA_KEYWORDS = ("yoga",)
LIFTING_KEYWORDS = ("weight", "strength", "lifting", "bodybuilding", "crosstraining")
CARDIO_KEYWORDS = (
    "run", "running",
    "ride", "cycling", "bike",
    "swim", "cardio", "hiit",
    "treadmill", "stair", "rowing", "elliptical", "walking",
)

# Strava reports generic gym sessions as "Workout"
GENERIC_WORKOUT_KEYWORD = "workout"


def categorize_activity(activity_type: Optional[str], include_generic_workout: bool = False) -> str:
    """
    Map an activity type label to one of the fixed workout categories.

    Matching is case-insensitive and substring based. Groups are tested in
    order (Yoga, Lifting, Cardio) and the first match wins.

    Args:
        activity_type: Free-text activity type, e.g. "TrailRun" or "Functional Strength Training"
        include_generic_workout: Also treat "workout" as Lifting (Strava variant)

    Returns:
        One of WORKOUT_CATEGORIES
    """
    label = (activity_type or "").lower()

    if any(keyword in label for keyword in YOGA_KEYWORDS):
        return YOGA

    lifting_keywords = LIFTING_KEYWORDS
    if include_generic_workout:
        lifting_keywords = lifting_keywords + (GENERIC_WORKOUT_KEYWORD,)
    if any(keyword in label for keyword in lifting_keywords):
        return LIFTING

    if any(keyword in label for keyword in CARDIO_KEYWORDS):
        return CARDIO

    return OTHER
