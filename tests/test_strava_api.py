"""Tests for Strava API access and activity parsing."""
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from shared.config import Settings
from shared.validators import MalformedPayloadError
from strava_webhook.strava_api import get_activity, parse_activity, resolve_access_token

ACTIVITY = {
    "id": 12345678,
    "name": "Morning Run",
    "type": "Run",
    "sport_type": "TrailRun",
    "start_date": "2024-01-01T08:00:00Z",
    "elapsed_time": 1830,
    "calories": 412.4,
    "distance": 5432.0,
}


def _response(status_code=200, json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = "body"
    return response


def test_parse_activity():
    activity = parse_activity(ACTIVITY)

    assert activity.id == 12345678
    assert activity.activity_type == "TrailRun"
    assert activity.start_date == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
    assert activity.start_day == "2024-01-01"
    assert activity.distance == 5432.0


def test_parse_activity_falls_back_to_type_and_name():
    data = dict(ACTIVITY, sport_type=None, name="")
    activity = parse_activity(data)

    assert activity.activity_type == "Run"
    assert activity.name == "Run"


def test_start_day_is_utc():
    activity = parse_activity(dict(ACTIVITY, start_date="2024-01-01T23:30:00-05:00"))
    assert activity.start_day == "2024-01-02"


@pytest.mark.parametrize("override", [
    {"id": None},
    {"id": "abc"},
    {"type": None, "sport_type": None},
    {"start_date": "not a date"},
    {"elapsed_time": None},
    {"elapsed_time": -5},
])
def test_parse_activity_rejects_malformed(override):
    with pytest.raises(MalformedPayloadError):
        parse_activity(dict(ACTIVITY, **override))


def test_get_activity_uses_bearer_token(settings):
    with patch("strava_webhook.strava_api.requests.get", return_value=_response(json_data=ACTIVITY)) as mock_get:
        activity = get_activity(12345678, settings)

    assert activity.name == "Morning Run"
    args, kwargs = mock_get.call_args
    assert args[0] == "https://www.strava.com/api/v3/activities/12345678"
    assert kwargs["headers"] == {"Authorization": "Bearer strava-token"}


def test_get_activity_returns_none_on_http_error(settings):
    with patch("strava_webhook.strava_api.requests.get", return_value=_response(status_code=404)):
        assert get_activity(1, settings) is None


def test_get_activity_returns_none_on_transport_error(settings):
    with patch("strava_webhook.strava_api.requests.get", side_effect=requests.exceptions.ConnectionError("down")):
        assert get_activity(1, settings) is None


def test_get_activity_returns_none_on_unusable_body(settings):
    with patch("strava_webhook.strava_api.requests.get", return_value=_response(json_data={"id": 1})):
        assert get_activity(1, settings) is None


def test_get_activity_without_token():
    settings = Settings(notion_api_key="k", notion_workout_database_id="db")
    with patch("strava_webhook.strava_api.requests.get") as mock_get:
        assert get_activity(1, settings) is None
    mock_get.assert_not_called()


def test_refresh_flow_used_when_configured():
    settings = Settings(
        notion_api_key="k",
        notion_workout_database_id="db",
        strava_access_token="static",
        strava_client_id="42",
        strava_client_secret="shh",
        strava_refresh_token="refresh",
    )
    token_response = _response(json_data={"access_token": "fresh", "expires_at": 0})
    with patch("strava_webhook.strava_api.requests.post", return_value=token_response) as mock_post:
        assert resolve_access_token(settings) == "fresh"

    args, kwargs = mock_post.call_args
    assert args[0] == "https://www.strava.com/oauth/token"
    assert kwargs["data"]["grant_type"] == "refresh_token"
    assert kwargs["data"]["refresh_token"] == "refresh"


def test_failed_refresh_returns_none():
    settings = Settings(
        notion_api_key="k",
        notion_workout_database_id="db",
        strava_client_id="42",
        strava_client_secret="shh",
        strava_refresh_token="refresh",
    )
    with patch("strava_webhook.strava_api.requests.post", return_value=_response(status_code=401)):
        assert resolve_access_token(settings) is None


def test_static_token_used_without_refresh_credentials(settings):
    with patch("strava_webhook.strava_api.requests.post") as mock_post:
        assert resolve_access_token(settings) == "strava-token"
    mock_post.assert_not_called()
