"""Base client for Notion API interactions."""

import os
from typing import Any, Dict, Optional

import httpx

from .errors import NotionAPIError, NotionDecodeError, NotionHeaderError, NotionTransportError
from .types import PropertyValue


class NotionClient:
    """Base client for Notion API interactions."""

    API_BASE = "https://api.notion.com/v1"
    API_VERSION = "2022-06-28"  # stable version

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Notion API token. If not provided, will look for NOTION_TOKEN env var.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, mostly useful for tests.
        """
        self.token = token or os.getenv("NOTION_TOKEN")
        if not self.token:
            raise RuntimeError("NOTION_TOKEN not set")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        """Get the headers required for Notion API requests."""
        if not self.token.isprintable() or not self.token.isascii():
            raise NotionHeaderError("token contains characters not allowed in a header")
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.API_VERSION,
            "Content-Type": "application/json",
        }

    def _url(self, path: str) -> str:
        """Construct a full URL from a path."""
        return f"{self.API_BASE}/{path.lstrip('/')}"

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request to the Notion API."""
        return self._send("GET", path, params=params)

    def post(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        """Make a POST request to the Notion API."""
        return self._send("POST", path, json=json)

    def _send(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        headers = self._headers()
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            try:
                r = client.request(method, self._url(path), headers=headers, **kwargs)
            except httpx.TimeoutException as e:
                raise NotionTransportError(f"{method} {path} timed out") from e
            except httpx.HTTPError as e:
                raise NotionTransportError(f"{method} {path} failed: {e}") from e
            try:
                r.raise_for_status()
            except httpx.HTTPStatusError as e:
                code, detail = self._extract_error_detail(r)
                raise NotionAPIError(r.status_code, code, detail) from e
            try:
                return r.json()
            except ValueError as e:
                raise NotionDecodeError(f"{method} {path} returned a non-JSON body") from e

    @staticmethod
    def _extract_error_detail(response: httpx.Response) -> tuple[Optional[str], str]:
        """Extract the error code and message from a Notion API response."""
        try:
            body = response.json()
        except ValueError:
            return None, response.text or "No details available"
        if not isinstance(body, dict):
            return None, "No details available"
        return body.get("code"), body.get("message") or "No details available"

    @staticmethod
    def extract_plain_text(prop: PropertyValue) -> str:
        """Extract plain text from a property value."""
        ptype = prop.get("type")
        if ptype in ("title", "rich_text"):
            text_list = prop.get(ptype) or []
            return "".join(t.get("plain_text", "") for t in text_list).strip()
        return ""
