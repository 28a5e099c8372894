"""Exceptions raised by the Notion API collaborators."""

from typing import Optional


class NotionError(Exception):
    """Base class for failures talking to Notion."""


class NotionAPIError(NotionError):
    """Notion answered with a non-2xx status."""

    def __init__(self, status: int, code: Optional[str], message: str) -> None:
        super().__init__(f"Notion API error ({status}): {message}")
        self.status = status
        self.code = code
        self.message = message


class NotionHeaderError(NotionError):
    """A request header (usually the token) could not be encoded."""


class NotionTransportError(NotionError):
    """The request never got an answer (connection, timeout, protocol)."""


class NotionDecodeError(NotionError):
    """Notion answered with a body that is not JSON."""
