"""Main webhook handler for processing Strava activity events."""

import azure.functions as func
import logging
from typing import Any, Optional

from shared.config import Settings
from shared.notion_api import NotionClient
from shared.responses import json_response, method_not_allowed
from shared.validators import validate_request_size
from .notion_handler import add_activity_to_notion, is_duplicate_activity
from .strava_api import get_activity

IGNORED = "ignored"
FETCH_FAILED = "fetch_failed"
DUPLICATE = "duplicate"
CREATED = "created"


def strava_workout_webhook(
    req: func.HttpRequest,
    settings: Settings,
    notion: Optional[NotionClient] = None
) -> func.HttpResponse:
    """
    Webhook endpoint for Strava push subscriptions.

    GET answers the subscription challenge (hub.challenge).
    POST receives events; only activity "create" events are synced.

    Strava retries any non-2xx answer, so events that cannot be processed
    (ignored types, failed fetches) are still acknowledged with 200.
    """
    method = (req.method or "").upper()
    logging.info(f'Strava webhook received ({method}).')

    if method == "GET":
        challenge = req.params.get("hub.challenge")
        if challenge:
            logging.info("Answering Strava subscription challenge")
            return json_response({"hub.challenge": challenge})
        return method_not_allowed()

    if method != "POST":
        return method_not_allowed()

    # Strava retries non-2xx answers, so only an oversized body is refused
    is_valid, status_code, error_msg = validate_request_size(req, reject_invalid_header=False)
    if not is_valid:
        return json_response({"error": error_msg}, status_code=status_code)

    try:
        try:
            event = req.get_json()
        except ValueError as e:
            logging.error(f"Invalid JSON payload: {str(e)}")
            return json_response({"error": f"Invalid JSON payload: {str(e)}"}, status_code=500)

        logging.info(f"Received Strava event: {event}")
        outcome = process_event(event, settings, notion or NotionClient.from_settings(settings))
        logging.info(f"Strava event outcome: {outcome}")

        return json_response({"received": True})

    except Exception as e:
        logging.error(f"Error processing Strava webhook: {str(e)}", exc_info=True)
        return json_response({"error": str(e)}, status_code=500)


def process_event(event: Any, settings: Settings, notion: NotionClient) -> str:
    """
    Sync a single Strava webhook event into Notion.

    Returns:
        One of IGNORED, FETCH_FAILED, DUPLICATE, CREATED

    Raises:
        requests.HTTPError: If creating the Notion page fails
    """
    if not isinstance(event, dict):
        logging.warning("Ignoring Strava event that is not a JSON object")
        return IGNORED

    if event.get("object_type") != "activity" or event.get("aspect_type") != "create":
        logging.info(
            f"Ignoring Strava event: object_type={event.get('object_type')}, "
            f"aspect_type={event.get('aspect_type')}"
        )
        return IGNORED

    object_id = event.get("object_id")
    if isinstance(object_id, bool) or (isinstance(object_id, float) and not object_id.is_integer()):
        object_id = None
    try:
        activity_id = int(object_id)
    except (TypeError, ValueError):
        logging.warning(f"Ignoring malformed Strava event, invalid object_id: {object_id!r}")
        return IGNORED

    logging.info(f"Fetching activity details from Strava API: {activity_id}")
    activity = get_activity(activity_id, settings)
    if activity is None:
        logging.error(f"Failed to fetch activity data for ID: {activity_id}")
        return FETCH_FAILED

    if is_duplicate_activity(activity, notion):
        logging.info(f"Activity already exists in Notion: {activity.name} (Strava ID {activity.id})")
        return DUPLICATE

    notion_page_id = add_activity_to_notion(activity, notion)
    logging.info(f"Created Notion page {notion_page_id} for activity: {activity.name}")
    return CREATED
