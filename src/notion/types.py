"""Type definitions and constants for Notion API."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict

# Notion caps page_size on every paginated endpoint at 100.
MAX_PAGE_SIZE = 100


class DateValue(TypedDict, total=False):
    """The payload of a date property."""

    start: Optional[str]
    end: Optional[str]
    time_zone: Optional[str]


class PropertyValue(TypedDict, total=False):
    """A Notion property value as returned on a page object."""

    id: str
    type: str
    title: List[Dict[str, Any]]
    rich_text: List[Dict[str, Any]]
    select: Optional[Dict[str, Any]]
    status: Optional[Dict[str, Any]]
    multi_select: List[Dict[str, Any]]
    checkbox: bool
    number: Optional[float]
    url: Optional[str]
    email: Optional[str]
    phone_number: Optional[str]
    date: Optional[DateValue]
    created_time: str
    last_edited_time: Optional[str]
    people: List[Dict[str, Any]]


class QueryResponse(TypedDict, total=False):
    """One page of a paginated Notion list endpoint."""

    object: str
    results: List[Dict[str, Any]]
    next_cursor: Optional[str]
    has_more: bool


@dataclass
class PageSummary:
    """Summary information about a Notion page."""

    id: str
    title: str
    last_edited_time: str
