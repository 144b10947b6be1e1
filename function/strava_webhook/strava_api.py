"""Helper module for interacting with Strava API."""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from shared.config import Settings
from shared.validators import MalformedPayloadError, parse_number, parse_timestamp

STRAVA_API_URL = "https://www.strava.com/api/v3"
STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"


@dataclass(frozen=True)
class StravaActivity:
    """The subset of a Strava activity that gets written to Notion."""

    id: int
    name: str
    type: str
    start_date: datetime
    elapsed_time: float
    sport_type: Optional[str] = None
    calories: Optional[float] = None
    distance: Optional[float] = None

    @property
    def activity_type(self) -> str:
        return self.sport_type or self.type

    @property
    def start_day(self) -> str:
        """Start date (UTC) as YYYY-MM-DD."""
        return self.start_date.astimezone(timezone.utc).date().isoformat()


def parse_activity(data: Any) -> StravaActivity:
    """
    Parse a Strava activity response into a StravaActivity.

    Args:
        data: Decoded JSON body of GET /activities/{id}

    Returns:
        Parsed activity

    Raises:
        MalformedPayloadError: If required fields are missing or invalid
    """
    if not isinstance(data, dict):
        raise MalformedPayloadError("Strava activity must be a JSON object")

    activity_id = data.get("id")
    if isinstance(activity_id, bool) or not isinstance(activity_id, (int, str)):
        raise MalformedPayloadError("Strava activity is missing 'id'")
    try:
        activity_id = int(activity_id)
    except ValueError:
        raise MalformedPayloadError(f"Strava activity id is not an integer: {activity_id!r}")

    activity_type = data.get("type")
    sport_type = data.get("sport_type")
    if not isinstance(activity_type, str):
        activity_type = ""
    if not isinstance(sport_type, str) or not sport_type:
        sport_type = None
    if not activity_type and not sport_type:
        raise MalformedPayloadError("Strava activity is missing 'type' and 'sport_type'")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        name = sport_type or activity_type

    return StravaActivity(
        id=activity_id,
        name=name,
        type=activity_type,
        sport_type=sport_type,
        start_date=parse_timestamp(data.get("start_date"), "start_date"),
        elapsed_time=parse_number(data.get("elapsed_time"), "elapsed_time"),
        calories=parse_number(data.get("calories"), "calories", required=False),
        distance=parse_number(data.get("distance"), "distance", required=False),
    )


def _token_fingerprint(token: str) -> str:
    """Return a short, non-reversible fingerprint for a token for debugging."""
    if not token:
        return "none"
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:10]


def refresh_access_token(settings: Settings) -> Optional[str]:
    """
    Exchange the configured refresh token for a short-lived access token.

    Returns:
        Access token, or None if the refresh failed
    """
    logging.info(
        f"Refreshing Strava access token (client_id={settings.strava_client_id}, "
        f"refresh_fingerprint={_token_fingerprint(settings.strava_refresh_token)})"
    )

    try:
        response = requests.post(
            STRAVA_TOKEN_URL,
            data={
                "client_id": settings.strava_client_id,
                "client_secret": settings.strava_client_secret,
                "refresh_token": settings.strava_refresh_token,
                "grant_type": "refresh_token",
            },
            timeout=settings.http_timeout
        )

        if response.status_code != 200:
            logging.error(f"Strava token refresh error: {response.status_code} - {response.text}")
            return None

        access_token = response.json().get("access_token")
    except (requests.exceptions.RequestException, ValueError) as e:
        logging.error(f"Failed to refresh Strava access token: {str(e)}")
        return None

    if not access_token:
        logging.error("Strava token refresh response did not include access_token")
        return None

    logging.info(f"Refreshed Strava access token (access_fingerprint={_token_fingerprint(access_token)})")
    return access_token


def resolve_access_token(settings: Settings) -> Optional[str]:
    """Use the refresh flow when it is fully configured, else the static access token."""
    if settings.strava_refresh_enabled:
        return refresh_access_token(settings)
    return settings.strava_access_token


def get_activity(activity_id: int, settings: Settings) -> Optional[StravaActivity]:
    """
    Fetch activity details from Strava API.

    Args:
        activity_id: Strava activity ID
        settings: Application settings

    Returns:
        Parsed activity, or None if the fetch failed or returned unusable data
    """
    access_token = resolve_access_token(settings)
    if not access_token:
        logging.error("No Strava access token available")
        return None

    headers = {
        "Authorization": f"Bearer {access_token}"
    }

    try:
        response = requests.get(
            f"{STRAVA_API_URL}/activities/{activity_id}",
            headers=headers,
            timeout=settings.http_timeout
        )

        if response.status_code != 200:
            logging.error(f"Strava API error: {response.status_code} - {response.text}")
            return None

        data: Dict[str, Any] = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logging.error(f"Failed to fetch activity from Strava API: {str(e)}")
        return None

    try:
        return parse_activity(data)
    except MalformedPayloadError as e:
        logging.error(f"Strava returned an unusable activity {activity_id}: {str(e)}")
        return None
