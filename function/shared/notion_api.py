"""Notion database integration shared by the webhooks."""

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import Settings

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient:
    """Minimal client for one Notion database: query pages and create pages."""

    def __init__(self, api_key: str, database_id: str, timeout: float = 10):
        self.database_id = database_id
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotionClient":
        return cls(
            settings.notion_api_key,
            settings.notion_workout_database_id,
            timeout=settings.http_timeout
        )

    def query_database(self, filter_: Dict[str, Any], start_cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        Run a single filtered query against the database.

        Returns:
            Raw Notion query response (``results``, ``has_more``, ``next_cursor``)

        Raises:
            requests.RequestException: On transport errors or non-200 responses
        """
        payload = {"filter": filter_}
        if start_cursor:
            payload["start_cursor"] = start_cursor

        response = requests.post(
            f"{NOTION_API_URL}/databases/{self.database_id}/query",
            headers=self.headers,
            json=payload,
            timeout=self.timeout
        )

        if response.status_code != 200:
            logging.error(f"Notion query error: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    def query_all(self, filter_: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run a filtered query and follow pagination until all pages are collected."""
        pages = []
        start_cursor = None

        while True:
            data = self.query_database(filter_, start_cursor=start_cursor)
            pages.extend(data.get("results", []))

            start_cursor = data.get("next_cursor")
            if not data.get("has_more") or not start_cursor:
                return pages

    def create_page(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a page in the database.

        Returns:
            Response from Notion API

        Raises:
            requests.RequestException: On transport errors or non-200 responses
        """
        payload = {
            "parent": {
                "database_id": self.database_id
            },
            "properties": properties
        }

        response = requests.post(
            f"{NOTION_API_URL}/pages",
            headers=self.headers,
            json=payload,
            timeout=self.timeout
        )

        if response.status_code != 200:
            logging.error(f"Notion API error: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()


def date_property(day: str) -> Dict[str, Any]:
    return {"date": {"start": day}}


def select_property(name: str) -> Dict[str, Any]:
    return {"select": {"name": name}}


def number_property(value) -> Dict[str, Any]:
    return {"number": value}


def rich_text_property(content: str) -> Dict[str, Any]:
    return {
        "rich_text": [
            {
                "text": {
                    "content": content
                }
            }
        ]
    }


def read_rich_text(page: Dict[str, Any], property_name: str) -> str:
    """Concatenate the text of a rich_text property, empty string if absent."""
    prop = page.get("properties", {}).get(property_name) or {}
    parts = []
    for item in prop.get("rich_text") or []:
        text = item.get("plain_text")
        if text is None:
            text = (item.get("text") or {}).get("content", "")
        parts.append(text)
    return "".join(parts)


def read_number(page: Dict[str, Any], property_name: str):
    prop = page.get("properties", {}).get(property_name) or {}
    return prop.get("number")
