"""Shared utilities and functions used across multiple webhooks."""

from .config import Settings, ConfigurationError
from .classifier import categorize_activity, WORKOUT_CATEGORIES
from .notion_api import NotionClient
from .responses import json_response, empty_response, method_not_allowed, CORS_HEADERS
from .validators import (
    MalformedPayloadError,
    validate_request_size,
    sanitize_text_input,
    parse_timestamp,
    parse_number,
    format_utc_timestamp,
    MAX_REQUEST_SIZE
)

__all__ = [
    'Settings',
    'ConfigurationError',
    'categorize_activity',
    'WORKOUT_CATEGORIES',
    'NotionClient',
    'json_response',
    'empty_response',
    'method_not_allowed',
    'CORS_HEADERS',
    'MalformedPayloadError',
    'validate_request_size',
    'sanitize_text_input',
    'parse_timestamp',
    'parse_number',
    'format_utc_timestamp',
    'MAX_REQUEST_SIZE'
]
