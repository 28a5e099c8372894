from datetime import datetime, timezone

import pytest

from conftest import FakeNotion
from notion.errors import NotionAPIError
from storage import (
    ByteRange,
    EntryMode,
    NotDirectoryError,
    NotFoundError,
    NotionAccessor,
    NotionServiceBuilder,
    PermissionDeniedError,
    UnexpectedError,
    UnsupportedError,
)


def test_stat_root_is_directory(notion):
    meta = NotionAccessor(notion).stat("/")
    assert meta.mode is EntryMode.DIR
    assert notion.calls == []


def test_stat_page(notion):
    meta = NotionAccessor(notion).stat("page123.md")
    assert meta.mode is EntryMode.FILE
    assert meta.content_type == "text/markdown"
    assert meta.content_length == len("Body text\n")
    assert meta.last_modified == datetime(2025, 8, 12, 12, 0, tzinfo=timezone.utc)


def test_read_with_frontmatter_matches_stat_length(notion):
    accessor = NotionAccessor(notion, frontmatter=True)
    meta = accessor.stat("page123.md")
    result = accessor.read("page123.md", ByteRange())

    assert result.size == meta.content_length == len(result.content)
    assert result.content.decode() == (
        '---\nDone: "true"\nName: "Hello"\nTags: "a, b"\n---\n\nBody text\n'
    )


def test_read_rejects_partial_range(notion):
    with pytest.raises(UnsupportedError):
        NotionAccessor(notion).read("page123.md", ByteRange(offset=10))
    with pytest.raises(UnsupportedError):
        NotionAccessor(notion).read("page123.md", ByteRange(size=5))
    assert notion.calls == []


def test_bad_paths_never_reach_notion(notion):
    accessor = NotionAccessor(notion)
    for path in ("a/b.md", "../x", ".md"):
        with pytest.raises(NotFoundError):
            accessor.read(path)
    assert notion.calls == []


def test_missing_page_is_not_found(notion):
    with pytest.raises(NotFoundError) as exc_info:
        NotionAccessor(notion).stat("nope.md")
    assert exc_info.value.context["operation"] == "fetch page nope"


def test_permission_denied(notion):
    notion.errors[0] = NotionAPIError(401, "unauthorized", "API token is invalid.")
    with pytest.raises(PermissionDeniedError):
        NotionAccessor(notion).read("page123.md")


def test_render_failure_is_unexpected(notion):
    class BrokenRenderer:
        def render(self, page_id):
            raise NotionAPIError(404, "object_not_found", "block gone")

    with pytest.raises(UnexpectedError) as exc_info:
        NotionAccessor(notion, renderer=BrokenRenderer()).read("page123.md")
    assert exc_info.value.message == "failed to render notion page"


def test_list_requires_database(notion):
    with pytest.raises(UnsupportedError):
        NotionAccessor(notion).list("/")


def test_list_rejects_non_root(notion):
    with pytest.raises(NotDirectoryError):
        NotionAccessor(notion, database_id="db1").list("page123.md")


def test_list_yields_every_page_once(notion):
    lister = NotionAccessor(notion, database_id="db1").list("/")
    entries = list(lister)

    assert [e.path for e in entries] == [f"p{i}.md" for i in range(250)]
    assert all(e.metadata.content_type == "text/markdown" for e in entries)
    assert notion.calls.count("POST databases/db1/query") == 3
    # single pass
    assert list(lister) == []


@pytest.mark.parametrize("path", ["", "/", "./", "/."])
def test_list_root_spellings(notion, path):
    assert len(list(NotionAccessor(notion, database_id="db1").list(path))) == 250


def test_list_missing_database(notion):
    with pytest.raises(NotFoundError):
        NotionAccessor(notion, database_id="missing").list("/")


def test_capabilities(notion):
    assert NotionAccessor(notion).info().capability.list is False
    info = NotionAccessor(notion, database_id="db1").info()
    assert info.capability.stat and info.capability.read and info.capability.list
    assert info.scheme == "notion" and info.root == "/"


def test_builder(notion):
    builder = NotionServiceBuilder().token("").database_id("db1").frontmatter(True)
    assert builder.config.token is None
    with pytest.raises(RuntimeError):
        builder.build()

    accessor = builder.build(client=notion)
    assert accessor.database_id == "db1" and accessor.frontmatter is True


def test_builder_hides_token():
    builder = NotionServiceBuilder().token("secret_abc")
    assert "secret_abc" not in repr(builder)
    accessor = builder.build()
    assert accessor.client.token == "secret_abc"


def test_empty_database_id_disables_listing(notion, monkeypatch):
    monkeypatch.setenv("NOTION_DB_ID", "db1")
    accessor = NotionAccessor(notion, database_id="")
    assert accessor.info().capability.list is False
    with pytest.raises(UnsupportedError):
        accessor.list("/")
    assert notion.calls == []
