import json

import httpx
import pytest

from notion import NotionClient, NotionDatabase, NotionPage
from notion.errors import NotionAPIError, NotionDecodeError, NotionHeaderError, NotionTransportError


def client_for(handler):
    return NotionClient("tok", transport=httpx.MockTransport(handler))


def test_requests_carry_auth_and_version():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["version"] = request.headers["Notion-Version"]
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"id": "p1", "last_edited_time": "2025-01-01T00:00:00.000Z"})

    page = NotionPage(client_for(handler), "p1")
    assert page.data["id"] == "p1"
    assert seen == {
        "auth": "Bearer tok",
        "version": NotionClient.API_VERSION,
        "url": "https://api.notion.com/v1/pages/p1",
    }


def test_error_body_is_parsed():
    def handler(request):
        return httpx.Response(
            404, json={"object": "error", "code": "object_not_found", "message": "Could not find page"}
        )

    with pytest.raises(NotionAPIError) as exc_info:
        client_for(handler).get("pages/x")
    assert exc_info.value.status == 404
    assert exc_info.value.code == "object_not_found"
    assert exc_info.value.message == "Could not find page"


def test_error_without_json_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(NotionAPIError) as exc_info:
        client_for(handler).get("pages/x")
    assert exc_info.value.status == 502
    assert exc_info.value.code is None
    assert exc_info.value.message == "Bad Gateway"


def test_non_json_success_body():
    with pytest.raises(NotionDecodeError):
        client_for(lambda request: httpx.Response(200, text="<html>")).get("pages/x")


def test_transport_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(NotionTransportError):
        client_for(handler).get("pages/x")


def test_token_that_cannot_be_a_header():
    client = NotionClient("tok\nen", transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with pytest.raises(NotionHeaderError):
        client.get("users/me")


def test_missing_token(monkeypatch):
    monkeypatch.delenv("NOTION_TOKEN", raising=False)
    with pytest.raises(RuntimeError):
        NotionClient()


def test_database_query_sends_cursor_and_page_size():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"results": [], "has_more": False, "next_cursor": None})

    db = NotionDatabase(client_for(handler), "db1")
    db.query()
    db.query("abc", page_size=10)
    assert bodies == [{"page_size": 100}, {"page_size": 10, "start_cursor": "abc"}]


def test_summarize_pages():
    db = NotionDatabase(client_for(lambda r: httpx.Response(200, json={})), "db1")
    pages = [
        {
            "id": "p1",
            "last_edited_time": "2025-08-12T12:00:00.000Z",
            "properties": {"Name": {"type": "title", "title": [{"plain_text": "A"}]}},
        }
    ]
    [summary] = db.summarize_pages(pages)
    assert (summary.id, summary.title) == ("p1", "A")
