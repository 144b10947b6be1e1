"""HTTP response helpers with the CORS headers every endpoint returns."""

import json

import azure.functions as func

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def json_response(data, status_code=200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(data, separators=(",", ":")),
        status_code=status_code,
        mimetype="application/json",
        headers=dict(CORS_HEADERS)
    )


def empty_response(status_code=200) -> func.HttpResponse:
    return func.HttpResponse(
        "",
        status_code=status_code,
        headers=dict(CORS_HEADERS)
    )


def method_not_allowed() -> func.HttpResponse:
    return json_response({"error": "Method not allowed"}, status_code=405)
