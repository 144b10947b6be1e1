"""Validation and sanitization functions for webhook inputs."""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

# Define maximum request size (10MB)
MAX_REQUEST_SIZE = 10 * 1024 * 1024  # 10MB in bytes


class MalformedPayloadError(ValueError):
    """Raised when an inbound or fetched payload cannot be parsed."""


def validate_request_size(req, reject_invalid_header=True):
    """
    Validate request size from the Content-Length header.

    Args:
        req: HTTP request object for header access
        reject_invalid_header: Fail on a non-numeric Content-Length instead of ignoring it

    Returns:
        tuple: (is_valid, status_code, error_message)
    """
    content_length = req.headers.get('Content-Length')
    if not content_length:
        return True, None, None

    try:
        content_length_int = int(content_length)
    except ValueError:
        logging.warning(f"Invalid Content-Length header: {content_length}")
        if not reject_invalid_header:
            return True, None, None
        return False, 400, "Invalid Content-Length header"

    if content_length_int > MAX_REQUEST_SIZE:
        logging.warning(f"Request too large: {content_length_int} bytes")
        return False, 413, f"Request too large. Maximum size is {MAX_REQUEST_SIZE / (1024*1024):.0f}MB"

    return True, None, None


def sanitize_text_input(text, field_name, max_length=1000):
    """
    Sanitize and validate text input.

    Args:
        text: Input text to sanitize
        field_name: Name of the field (for logging)
        max_length: Maximum allowed length

    Returns:
        Sanitized text or None
    """
    if text is None:
        return None

    # Convert to string and strip whitespace
    text = str(text).strip()

    # Check length
    if len(text) > max_length:
        logging.warning(f"{field_name} exceeded max length ({len(text)} > {max_length})")
        text = text[:max_length]

    # Remove null bytes and other control characters
    text = ''.join(char for char in text if char.isprintable() or char == ' ')

    return text.strip() or None


def parse_timestamp(value: Any, field_name: str) -> datetime:
    """
    Parse an ISO 8601 timestamp. Naive timestamps are taken as UTC.

    Raises:
        MalformedPayloadError: If the value is missing or not ISO 8601
    """
    if not isinstance(value, str) or not value.strip():
        raise MalformedPayloadError(f"'{field_name}' must be an ISO 8601 timestamp")

    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        raise MalformedPayloadError(f"'{field_name}' is not a valid ISO 8601 timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_number(value: Any, field_name: str, required: bool = True) -> Optional[float]:
    """
    Parse a non-negative finite number.

    Numeric strings are accepted since iOS Shortcuts often sends numbers as text.

    Raises:
        MalformedPayloadError: If the value is invalid, negative, or required and missing
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise MalformedPayloadError(f"'{field_name}' is required")
        return None

    if isinstance(value, bool):
        raise MalformedPayloadError(f"'{field_name}' must be a number")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedPayloadError(f"'{field_name}' must be a number, got {value!r}")

    if not math.isfinite(number) or number < 0:
        raise MalformedPayloadError(f"'{field_name}' must be a non-negative number, got {value!r}")

    return number


def format_utc_timestamp(value: datetime) -> str:
    """Render a timestamp in UTC with millisecond precision and a trailing Z."""
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{utc_value.microsecond // 1000:03d}Z"
