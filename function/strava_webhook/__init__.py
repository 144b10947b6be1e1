"""Strava webhook module for syncing activities from Strava."""

from .strava_webhook import strava_workout_webhook
from . import strava_api

__all__ = ['strava_workout_webhook', 'strava_api']
