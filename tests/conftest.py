"""Shared test fixtures."""

import json
import os
from typing import Any, Dict, List, Optional

import azure.functions as func
import pytest

# function_app reads settings at import time
os.environ.setdefault("NOTION_API_KEY", "secret_test")
os.environ.setdefault("NOTION_WORKOUT_DATABASE_ID", "db-test")

from shared.config import Settings
from shared.notion_api import read_rich_text


class FakeNotion:
    """In-memory stand-in for NotionClient that evaluates simple filters."""

    def __init__(self, pages: Optional[List[Dict[str, Any]]] = None, page_size: int = 100):
        self.pages = list(pages or [])
        self.page_size = page_size
        self.queries: List[Dict[str, Any]] = []
        self.created: List[Dict[str, Any]] = []
        self.fail_query = None
        self.fail_create_after = None

    def query_database(self, filter_, start_cursor=None):
        self.queries.append(filter_)
        if self.fail_query is not None:
            raise self.fail_query
        matches = [page for page in self.pages if _matches(page, filter_)]
        offset = int(start_cursor or 0)
        chunk = matches[offset:offset + self.page_size]
        has_more = offset + self.page_size < len(matches)
        return {
            "results": chunk,
            "has_more": has_more,
            "next_cursor": str(offset + self.page_size) if has_more else None,
        }

    def query_all(self, filter_):
        pages = []
        cursor = None
        while True:
            data = self.query_database(filter_, start_cursor=cursor)
            pages.extend(data["results"])
            cursor = data["next_cursor"]
            if not data["has_more"]:
                return pages

    def create_page(self, properties):
        if self.fail_create_after is not None and len(self.created) >= self.fail_create_after:
            raise RuntimeError("Notion API error: 500")
        page = {"id": f"page-{len(self.pages) + 1}", "properties": properties}
        self.pages.append(page)
        self.created.append(page)
        return page


def _matches(page, filter_):
    if "and" in filter_:
        return all(_matches(page, f) for f in filter_["and"])
    prop = page["properties"].get(filter_["property"]) or {}
    if "date" in filter_:
        return (prop.get("date") or {}).get("start") == filter_["date"]["equals"]
    if "rich_text" in filter_:
        return read_rich_text(page, filter_["property"]) == filter_["rich_text"]["equals"]
    raise AssertionError(f"Unsupported filter: {filter_}")


def make_request(method, body=None, params=None, headers=None, route="api/test"):
    if body is None:
        raw = b""
    elif isinstance(body, (bytes, str)):
        raw = body.encode() if isinstance(body, str) else body
    else:
        raw = json.dumps(body).encode()
    return func.HttpRequest(
        method=method,
        url=f"http://localhost/{route}",
        headers=headers or {},
        params=params or {},
        body=raw,
    )


@pytest.fixture
def settings():
    return Settings(
        notion_api_key="secret_test",
        notion_workout_database_id="db-test",
        strava_access_token="strava-token",
    )


@pytest.fixture
def notion():
    return FakeNotion()
