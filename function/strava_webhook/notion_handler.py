"""Notion database integration for Strava activities."""

import logging
from typing import Any, Dict

import requests

from shared.classifier import categorize_activity
from shared.notion_api import (
    NotionClient,
    date_property,
    number_property,
    rich_text_property,
    select_property
)
from shared.units import calories_to_int, meters_to_kilometers, seconds_to_whole_minutes
from .strava_api import StravaActivity

SOURCE_NAME = "Strava"


def is_duplicate_activity(activity: StravaActivity, notion: NotionClient) -> bool:
    """
    Check whether the activity already has a Notion page.

    Matches on Date and Strava ID. If the query fails the activity is treated
    as new, so a new activity is never dropped.
    """
    search_filter = {
        "and": [
            {
                "property": "Date",
                "date": {"equals": activity.start_day}
            },
            {
                "property": "Strava ID",
                "rich_text": {"equals": str(activity.id)}
            }
        ]
    }

    try:
        results = notion.query_database(search_filter).get("results", [])
    except (requests.exceptions.RequestException, ValueError) as e:
        logging.warning(f"Could not check for existing activity: {str(e)}. Will create new entry.")
        return False

    return len(results) > 0


def build_activity_properties(activity: StravaActivity) -> Dict[str, Any]:
    """Build Notion page properties for a Strava activity."""
    category = categorize_activity(activity.activity_type, include_generic_workout=True)

    return {
        "Date": date_property(activity.start_day),
        "Workout Type": select_property(category),
        "Specific Activity": rich_text_property(activity.name),
        "Duration (Minutes)": number_property(seconds_to_whole_minutes(activity.elapsed_time)),
        "Calories": number_property(calories_to_int(activity.calories)),
        "Source": select_property(SOURCE_NAME),
        "Strava ID": rich_text_property(str(activity.id)),
        "Distance (km)": number_property(meters_to_kilometers(activity.distance))
    }


def add_activity_to_notion(activity: StravaActivity, notion: NotionClient) -> str:
    """
    Create a Notion page for a Strava activity.

    Returns:
        ID of the created Notion page

    Raises:
        requests.HTTPError: If Notion API request fails
    """
    logging.info(f"Creating new workout: Strava ID {activity.id}")
    response = notion.create_page(build_activity_properties(activity))
    return response.get("id")
