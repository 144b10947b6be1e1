"""Main webhook handler for batches of Apple Health workouts."""

import azure.functions as func
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from shared.classifier import categorize_activity
from shared.config import Settings
from shared.notion_api import NotionClient
from shared.responses import empty_response, json_response, method_not_allowed
from shared.validators import MalformedPayloadError, validate_request_size
from .notion_handler import add_workout_to_notion, get_workout_keys_for_day, is_existing_workout
from .workouts import parse_workouts

ALREADY_EXISTS = "Already exists"


def health_batch_webhook(
    req: func.HttpRequest,
    settings: Settings,
    notion: Optional[NotionClient] = None,
    today: Optional[date] = None
) -> func.HttpResponse:
    """
    Webhook endpoint to receive a batch of workouts from iOS Shortcuts.

    Accepts JSON payload with:
    - workouts: list of {type, duration, calories?, startDate, endDate?, source?}

    Returns:
        JSON response with added/skipped counts, per-workout results and a
        human readable summary
    """
    method = (req.method or "").upper()
    logging.info(f'Health batch webhook received ({method}).')

    if method == "OPTIONS":
        return empty_response()

    if method != "POST":
        return method_not_allowed()

    is_valid, status_code, error_msg = validate_request_size(req)
    if not is_valid:
        return json_response({"error": error_msg}, status_code=status_code)

    try:
        req_body = req.get_json()
    except ValueError:
        logging.error("Invalid JSON payload")
        return json_response({"error": "Invalid JSON payload"}, status_code=400)

    entries = req_body.get("workouts") if isinstance(req_body, dict) else None
    if not isinstance(entries, list):
        logging.error("Request body has no 'workouts' list")
        return json_response({"error": "Request body must contain a 'workouts' list"}, status_code=400)

    try:
        workouts = parse_workouts(entries)
    except MalformedPayloadError as e:
        logging.warning(f"Invalid workout payload: {str(e)}")
        return json_response({"error": "Invalid workout payload", "details": str(e)}, status_code=400)

    logging.info(f"Processing {len(workouts)} workouts")

    notion = notion or NotionClient.from_settings(settings)
    local_tz = settings.local_tzinfo
    today = today or datetime.now(local_tz).date()
    results: List[Dict[str, Any]] = []

    try:
        existing_keys = get_workout_keys_for_day(notion, today)

        for workout in workouts:
            if is_existing_workout(workout, existing_keys):
                logging.info(f"Skipping existing workout: {workout.type} at {workout.start_time}")
                results.append({
                    "status": "skipped",
                    "type": workout.type,
                    "duration": workout.duration_minutes,
                    "reason": ALREADY_EXISTS
                })
                continue

            category = categorize_activity(workout.type)
            notion_page_id = add_workout_to_notion(workout, category, notion, local_tz)
            existing_keys.append(workout.dedup_key)
            logging.info(f"Created Notion page {notion_page_id} for {workout.type} ({category})")

            results.append({
                "status": "added",
                "type": workout.type,
                "duration": workout.duration_minutes,
                "category": category,
                "notion_id": notion_page_id
            })

    except Exception as e:
        logging.error(f"Error syncing workouts: {str(e)}", exc_info=True)
        return json_response({
            "error": "Failed to sync workouts",
            "details": str(e),
            "added_before_failure": [r for r in results if r["status"] == "added"]
        }, status_code=500)

    added = [r for r in results if r["status"] == "added"]
    skipped = [r for r in results if r["status"] == "skipped"]
    logging.info(f"Health batch processed: {len(added)} added, {len(skipped)} skipped")

    return json_response({
        "message": f"Synced {len(added)} workouts to Notion",
        "added": len(added),
        "skipped": len(skipped),
        "results": results,
        "summary": build_summary(added, skipped)
    })


def build_summary(added: List[Dict[str, Any]], skipped: List[Dict[str, Any]]) -> str:
    """Multi-line summary shown to the user by the Shortcut."""
    if added:
        lines = [f"✅ Added {len(added)} workout(s) to Notion:"]
        lines.extend(f"• {r['type']}: {r['duration']} min ({r['category']})" for r in added)
    else:
        lines = ["No new workouts to add."]

    if skipped:
        lines.append("")
        lines.append(f"⏭️ Skipped {len(skipped)} already in Notion:")
        lines.extend(f"• {r['type']}: {r['duration']} min" for r in skipped)

    return "\n".join(lines)
