"""
Azure Functions App Entry Point
================================
This module serves as the main entry point for Azure Functions.
The actual business logic is organized in the strava_webhook and health_batch packages.
"""

import azure.functions as func
from shared.config import Settings
from strava_webhook import strava_workout_webhook as strava_webhook_handler
from health_batch import health_batch_webhook as health_batch_handler

# Settings are read from the environment once, at process start
settings = Settings.from_env()

# Initialize Azure Functions app
app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


# Strava cannot send function keys, and the handler answers 405 for
# unsupported methods itself, so no method restriction here.
@app.route(route="strava_webhook", auth_level=func.AuthLevel.ANONYMOUS)
def strava_webhook(req: func.HttpRequest) -> func.HttpResponse:
    """
    Webhook endpoint for Strava push subscriptions.

    This is the main entry point that delegates to the strava_webhook handler.

    Accepts:
    - GET with hub.challenge query parameter (subscription validation)
    - POST with JSON event: object_type, aspect_type, object_id

    Returns:
        JSON response, 200 for every parseable event
    """
    return strava_webhook_handler(req, settings)


@app.route(route="health_batch")
def health_batch(req: func.HttpRequest) -> func.HttpResponse:
    """
    Webhook endpoint to receive Apple Health workouts from iOS Shortcuts.

    This is the main entry point that delegates to the health_batch handler.

    Accepts JSON payload with:
    - workouts: list of {type, duration, calories?, startDate, endDate?, source?}

    Returns:
        JSON response with added/skipped counts and a summary
    """
    return health_batch_handler(req, settings)
