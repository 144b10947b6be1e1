"""Notion database integration for Apple Health workouts."""

import logging
from datetime import date, tzinfo
from typing import Any, Dict, Iterable, List, Tuple

from shared.notion_api import (
    NotionClient,
    date_property,
    number_property,
    read_number,
    read_rich_text,
    rich_text_property,
    select_property
)
from shared.units import calories_to_int
from .workouts import HealthWorkout

WorkoutKey = Tuple[str, Any, str]


def get_workout_keys_for_day(notion: NotionClient, day: date) -> List[WorkoutKey]:
    """
    Fetch every workout page dated ``day`` and return their dedup keys.

    Raises:
        requests.RequestException: If the Notion query fails
    """
    pages = notion.query_all({
        "property": "Date",
        "date": {"equals": day.isoformat()}
    })
    logging.info(f"Found {len(pages)} existing workouts in Notion for {day.isoformat()}")
    return [page_dedup_key(page) for page in pages]


def page_dedup_key(page: Dict[str, Any]) -> WorkoutKey:
    return (
        read_rich_text(page, "Specific Activity"),
        read_number(page, "Duration (Minutes)"),
        read_rich_text(page, "Start Time"),
    )


def is_existing_workout(workout: HealthWorkout, existing_keys: Iterable[WorkoutKey]) -> bool:
    """True if any existing key matches the workout's label, rounded duration and start time."""
    activity, duration, start_time = workout.dedup_key
    return any(
        key[0] == activity and key[1] == duration and key[2] == start_time
        for key in existing_keys
    )


def build_workout_properties(workout: HealthWorkout, category: str, tz: tzinfo) -> Dict[str, Any]:
    return {
        "Date": date_property(workout.start_day(tz)),
        "Workout Type": select_property(category),
        "Specific Activity": rich_text_property(workout.type),
        "Duration (Minutes)": number_property(workout.duration_minutes),
        "Calories": number_property(calories_to_int(workout.calories)),
        "Source": select_property(workout.source),
        "Start Time": rich_text_property(workout.start_time)
    }


def add_workout_to_notion(workout: HealthWorkout, category: str, notion: NotionClient, tz: tzinfo) -> str:
    """
    Create a Notion page for a workout.

    Returns:
        ID of the created Notion page

    Raises:
        requests.HTTPError: If Notion API request fails
    """
    logging.info(f"Creating new workout: {workout.type} at {workout.start_time}")
    response = notion.create_page(build_workout_properties(workout, category, tz))
    return response.get("id")
