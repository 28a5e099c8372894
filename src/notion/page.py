"""Notion Page operations."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loguru import logger

from .client import NotionClient
from .types import PropertyValue


class NotionPage:
    """A Notion page with its properties."""

    def __init__(self, client: NotionClient, page_id: str) -> None:
        """Initialize a page.

        Args:
            client: The NotionClient instance to use for API calls
            page_id: The ID of the page
        """
        self.client = client
        self.id = page_id
        self._data: Optional[Dict[str, Any]] = None

    def refresh(self) -> None:
        """Refresh the page data from Notion."""
        self._data = self.client.get(f"pages/{self.id}")
        logger.debug(f"[notion] fetched page {self.id}")

    @property
    def data(self) -> Dict[str, Any]:
        """Get the page data, fetching it if not already loaded."""
        if self._data is None:
            self.refresh()
        return self._data or {}

    @property
    def properties(self) -> Dict[str, PropertyValue]:
        return self.data.get("properties", {})

    @property
    def last_edited_time(self) -> Optional[datetime]:
        ts = self.data.get("last_edited_time")
        return parse_iso_z(ts) if ts else None


def parse_iso_z(ts: str) -> datetime:
    """Parse ISO8601 timestamp with 'Z' timezone indicator."""
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    dt = datetime.fromisoformat(ts)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
