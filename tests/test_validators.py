"""Tests for input validation and unit conversions."""
from datetime import datetime, timedelta, timezone

import pytest

from shared.units import (
    calories_to_int,
    meters_to_kilometers,
    minutes_to_whole_minutes,
    seconds_to_whole_minutes,
)
from shared.validators import (
    MAX_REQUEST_SIZE,
    MalformedPayloadError,
    format_utc_timestamp,
    parse_number,
    parse_timestamp,
    sanitize_text_input,
    validate_request_size,
)
from conftest import make_request


def test_minutes_round_half_up():
    assert minutes_to_whole_minutes(62.6) == 63
    assert minutes_to_whole_minutes(62.5) == 63
    assert minutes_to_whole_minutes(62.4) == 62
    assert minutes_to_whole_minutes(0) == 0


def test_seconds_to_minutes():
    assert seconds_to_whole_minutes(1800) == 30
    assert seconds_to_whole_minutes(1829) == 30
    assert seconds_to_whole_minutes(1830) == 31


def test_meters_to_kilometers():
    assert meters_to_kilometers(5000) == 5.0
    assert meters_to_kilometers(5432) == 5.43
    assert meters_to_kilometers(None) == 0
    assert meters_to_kilometers(0) == 0


def test_calories_default_to_zero():
    assert calories_to_int(None) == 0
    assert calories_to_int(312.7) == 313


def test_parse_timestamp_handles_z_suffix_and_naive():
    assert parse_timestamp("2024-01-01T08:00:00Z", "startDate") == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-01T08:00:00", "startDate").tzinfo == timezone.utc


@pytest.mark.parametrize("value", [None, "", "yesterday", 1704096000])
def test_parse_timestamp_rejects_invalid(value):
    with pytest.raises(MalformedPayloadError):
        parse_timestamp(value, "startDate")


def test_parse_number():
    assert parse_number("45.5", "duration") == 45.5
    assert parse_number(None, "calories", required=False) is None
    for bad in [None, "abc", -1, True, float("nan")]:
        with pytest.raises(MalformedPayloadError):
            parse_number(bad, "duration")


def test_format_utc_timestamp_normalizes_offset():
    local = datetime(2024, 1, 1, 3, 0, 0, 123456, tzinfo=timezone(timedelta(hours=-5)))
    assert format_utc_timestamp(local) == "2024-01-01T08:00:00.123Z"


def test_sanitize_text_input():
    assert sanitize_text_input("  Running\x00 ", "type") == "Running"
    assert sanitize_text_input("   ", "type") is None
    assert sanitize_text_input(None, "type") is None
    assert sanitize_text_input("x" * 20, "type", max_length=5) == "xxxxx"


def test_validate_request_size():
    assert validate_request_size(make_request("POST", headers={"Content-Length": "10"}))[0]
    assert validate_request_size(make_request("POST"))[0]

    is_valid, status, _ = validate_request_size(
        make_request("POST", headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)})
    )
    assert not is_valid and status == 413

    is_valid, status, _ = validate_request_size(make_request("POST", headers={"Content-Length": "abc"}))
    assert not is_valid and status == 400


def test_validate_request_size_can_ignore_invalid_header():
    req = make_request("POST", headers={"Content-Length": "abc"})
    assert validate_request_size(req, reject_invalid_header=False) == (True, None, None)

    oversized = make_request("POST", headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)})
    assert validate_request_size(oversized, reject_invalid_header=False)[1] == 413
