from typing import Any, Dict, List, Optional

import pytest

from notion import NotionClient
from notion.errors import NotionAPIError


def make_page(page_id: str, title: str = "", **extra: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Name": {"id": "title", "type": "title", "title": [{"plain_text": title}]},
    }
    properties.update(extra)
    return {
        "object": "page",
        "id": page_id,
        "last_edited_time": "2025-08-12T12:00:00.000Z",
        "properties": properties,
    }


def paragraph(text: str, **extra: Any) -> Dict[str, Any]:
    block = {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": text}]}}
    block.update(extra)
    return block


class FakeNotion(NotionClient):
    """In-memory stand-in for the Notion API, paginating like the real one."""

    def __init__(self) -> None:
        super().__init__("secret-test-token")
        self.pages: Dict[str, Dict[str, Any]] = {}
        self.databases: Dict[str, List[Dict[str, Any]]] = {}
        self.blocks: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[str] = []
        # Keyed by 0-based call index.
        self.errors: Dict[int, Exception] = {}

    def _maybe_fail(self) -> None:
        exc = self.errors.get(len(self.calls) - 1)
        if exc is not None:
            raise exc

    @staticmethod
    def _paginate(items: List[Any], cursor: Optional[str], page_size: int) -> Dict[str, Any]:
        start = int(cursor) if cursor else 0
        end = start + page_size
        has_more = end < len(items)
        return {
            "object": "list",
            "results": items[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append(f"GET {path}")
        self._maybe_fail()
        params = params or {}
        kind, _, rest = path.partition("/")
        if kind == "pages" and rest in self.pages:
            return self.pages[rest]
        if kind == "blocks":
            block_id = rest.split("/")[0]
            return self._paginate(
                self.blocks.get(block_id, []),
                params.get("start_cursor"),
                int(params.get("page_size", 100)),
            )
        raise NotionAPIError(404, "object_not_found", f"Could not find {path}")

    def post(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(f"POST {path}")
        self._maybe_fail()
        database_id = path.split("/")[1]
        if database_id not in self.databases:
            raise NotionAPIError(404, "object_not_found", f"Could not find database {database_id}")
        return self._paginate(
            self.databases[database_id], json.get("start_cursor"), json.get("page_size", 100)
        )


@pytest.fixture
def notion() -> FakeNotion:
    fake = FakeNotion()
    fake.pages["page123"] = make_page(
        "page123",
        "Hello",
        Tags={"id": "tg", "type": "multi_select", "multi_select": [{"name": "a"}, {"name": "b"}]},
        Done={"id": "dn", "type": "checkbox", "checkbox": True},
    )
    fake.blocks["page123"] = [paragraph("Body text")]
    fake.databases["db1"] = [make_page(f"p{i}") for i in range(250)]
    return fake
