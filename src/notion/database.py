"""Notion Database operations."""

import os
from typing import Any, Dict, List, Optional

from loguru import logger

from .client import NotionClient
from .types import MAX_PAGE_SIZE, PageSummary, QueryResponse


class NotionDatabase:
    """A Notion database that can be queried one page at a time."""

    def __init__(self, client: NotionClient, database_id: Optional[str] = None) -> None:
        """Initialize a database.

        Args:
            client: The NotionClient instance to use for API calls
            database_id: The ID of the database. Default to NOTION_DB_ID env var.
        """
        self.client = client
        self.database_id = database_id or os.getenv("NOTION_DB_ID")
        if not self.database_id:
            raise RuntimeError("NOTION_DB_ID not set")

    def query(
        self, start_cursor: Optional[str] = None, page_size: int = MAX_PAGE_SIZE
    ) -> QueryResponse:
        """Fetch one page of database results.

        Args:
            start_cursor: Cursor returned by the previous page, or None to start
            page_size: Number of results per page

        Returns:
            The raw query response; ``next_cursor`` is None once exhausted.
        """
        payload: Dict[str, Any] = {"page_size": page_size}
        if start_cursor is not None:
            payload["start_cursor"] = start_cursor

        data = self.client.post(f"databases/{self.database_id}/query", payload)
        logger.debug(
            f"[notion] queried {self.database_id}: {len(data.get('results', []))} results, "
            f"has_more={data.get('has_more')}"
        )
        return data

    def summarize_pages(self, pages: List[Dict]) -> List[PageSummary]:
        """Create summaries of pages for debugging."""
        summaries = []
        for p in pages:
            pid = p["id"]
            ets = p.get("last_edited_time", "")
            # Extract title
            title = ""
            props = p.get("properties", {})
            for prop in props.values():
                if prop.get("type") == "title":
                    title = self.client.extract_plain_text(prop)
                    break
            summaries.append(PageSummary(id=pid, title=title, last_edited_time=ets))
        return summaries
