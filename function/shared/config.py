"""Application settings loaded once at process start."""

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_LOCAL_TIMEZONE = "UTC"


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """
    Configuration shared by the webhook handlers.

    Built once by ``Settings.from_env()`` in the function app and passed
    explicitly to each handler.
    """

    notion_api_key: str
    notion_workout_database_id: str
    strava_access_token: Optional[str] = None
    strava_client_id: Optional[str] = None
    strava_client_secret: Optional[str] = None
    strava_refresh_token: Optional[str] = None
    local_timezone: str = DEFAULT_LOCAL_TIMEZONE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    @property
    def strava_refresh_enabled(self) -> bool:
        return bool(self.strava_client_id and self.strava_client_secret and self.strava_refresh_token)

    @property
    def local_tzinfo(self) -> tzinfo:
        return _load_timezone(self.local_timezone)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If required variables are missing or invalid
        """
        env = os.environ if environ is None else environ

        notion_api_key = _clean(env.get("NOTION_API_KEY"))
        database_id = _clean(env.get("NOTION_WORKOUT_DATABASE_ID"))
        missing = [
            name for name, value in (
                ("NOTION_API_KEY", notion_api_key),
                ("NOTION_WORKOUT_DATABASE_ID", database_id),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

        local_timezone = _clean(env.get("LOCAL_TIMEZONE")) or DEFAULT_LOCAL_TIMEZONE
        _load_timezone(local_timezone)

        raw_timeout = _clean(env.get("HTTP_TIMEOUT_SECONDS"))
        http_timeout = DEFAULT_HTTP_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                http_timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(f"HTTP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
            if http_timeout <= 0:
                raise ConfigurationError("HTTP_TIMEOUT_SECONDS must be positive")

        return cls(
            notion_api_key=notion_api_key,
            notion_workout_database_id=database_id,
            strava_access_token=_clean(env.get("STRAVA_ACCESS_TOKEN")),
            strava_client_id=_clean(env.get("STRAVA_CLIENT_ID")),
            strava_client_secret=_clean(env.get("STRAVA_CLIENT_SECRET")),
            strava_refresh_token=_clean(env.get("STRAVA_REFRESH_TOKEN")),
            local_timezone=local_timezone,
            http_timeout=http_timeout,
        )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _load_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown LOCAL_TIMEZONE: {name}")
