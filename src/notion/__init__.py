"""Notion API client."""

from .client import NotionClient
from .database import NotionDatabase
from .errors import NotionAPIError, NotionError
from .markdown import MarkdownRenderer
from .page import NotionPage
from .types import PageSummary

__all__ = [
    "MarkdownRenderer",
    "NotionAPIError",
    "NotionClient",
    "NotionDatabase",
    "NotionError",
    "NotionPage",
    "PageSummary",
]
