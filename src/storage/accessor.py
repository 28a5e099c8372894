"""Read-only storage accessor over a Notion workspace."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Protocol

from loguru import logger

from notion import MarkdownRenderer, NotionClient, NotionDatabase, NotionPage

from .errors import NotDirectoryError, UnexpectedError, UnsupportedError, translated
from .frontmatter import apply_frontmatter
from .lister import FetchPage, ListingPage, ListingResult, ListingWindow, PaginatedLister
from .paths import entry_name, is_root, is_root_dir, parse_page_path
from .properties import KeyMode, PropertyMap, page_to_properties
from .types import AccessorInfo, ByteRange, Capability, Entry, EntryMode, Metadata, ReadResult

CONTENT_TYPE = "text/markdown"


class Renderer(Protocol):
    def render(self, page_id: str) -> str: ...


@dataclass
class Document:
    """A fetched page: its normalized properties and rendered markdown."""

    id: str
    properties: PropertyMap
    markdown: str
    last_modified: Optional[datetime]

    def content(self, frontmatter: bool) -> str:
        return apply_frontmatter(self.properties, self.markdown) if frontmatter else self.markdown


class NotionLister:
    """Forward-only iterator over the entries of a listing."""

    def __init__(self, page_ids: List[str]) -> None:
        self._ids: Iterator[str] = iter(page_ids)

    def __iter__(self) -> "NotionLister":
        return self

    def __next__(self) -> Entry:
        page_id = next(self._ids)
        meta = Metadata(EntryMode.FILE, content_type=CONTENT_TYPE)
        return Entry(path=entry_name(page_id), metadata=meta)


class NotionAccessor:
    """Answers stat/read/list for pages of a Notion workspace.

    Every call is self-contained: nothing fetched is kept between calls.
    """

    def __init__(
        self,
        client: NotionClient,
        database_id: Optional[str] = None,
        frontmatter: bool = False,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.client = client
        self.database_id = database_id
        self.frontmatter = frontmatter
        self.renderer: Renderer = renderer or MarkdownRenderer(client)

    def __repr__(self) -> str:
        return f"NotionAccessor(database_id={self.database_id!r}, frontmatter={self.frontmatter})"

    def info(self) -> AccessorInfo:
        return AccessorInfo(
            capability=Capability(stat=True, read=True, list=bool(self.database_id))
        )

    def load_document(self, page_id: str, property_keys: KeyMode = "name") -> Document:
        """Fetch a page, normalize its properties and render its content."""
        page = NotionPage(self.client, page_id)
        with translated(f"fetch page {page_id}"):
            page.refresh()
            last_modified = page.last_edited_time
        properties = page_to_properties(page.properties, key=property_keys)

        try:
            markdown = self.renderer.render(page_id)
        except Exception as e:
            logger.error(f"[storage] failed to render notion page {page_id}: {e!r}")
            raise UnexpectedError("failed to render notion page", {"source": str(e)}) from e

        return Document(
            id=page.data.get("id", page_id),
            properties=properties,
            markdown=markdown,
            last_modified=last_modified,
        )

    def _content(self, path: str) -> tuple[Document, bytes]:
        document = self.load_document(parse_page_path(path))
        return document, document.content(self.frontmatter).encode("utf-8")

    def stat(self, path: str) -> Metadata:
        if is_root(path):
            return Metadata(EntryMode.DIR)

        document, content = self._content(path)
        return Metadata(
            EntryMode.FILE,
            content_length=len(content),
            content_type=CONTENT_TYPE,
            last_modified=document.last_modified,
        )

    def read(self, path: str, byte_range: Optional[ByteRange] = None) -> ReadResult:
        if byte_range is not None and not byte_range.is_full():
            raise UnsupportedError(
                "range reads are not supported for notion",
                {"offset": byte_range.offset, "size": byte_range.size},
            )

        _, content = self._content(path)
        return ReadResult(size=len(content), content=content)

    def list(self, path: str) -> NotionLister:
        if not self.database_id:
            raise UnsupportedError("list requires a database_id")
        if not is_root_dir(path):
            raise NotDirectoryError("only root directory is listable", {"path": path})

        result = self.list_database(self.database_id)
        logger.info(f"[storage] listed {len(result.items)} pages from {self.database_id}")
        return NotionLister(result.ids)

    def list_database(
        self, database_id: str, window: Optional[ListingWindow] = None
    ) -> ListingResult:
        """List a database's pages, all of them or only ``window``."""
        lister = PaginatedLister(
            self._query(database_id), window=window, name=f"database {database_id}"
        )
        return lister.run()

    def _query(self, database_id: str) -> FetchPage:
        database = NotionDatabase(self.client, database_id)

        def fetch(cursor: Optional[str], page_size: int) -> ListingPage:
            data: Dict[str, Any] = database.query(cursor, page_size)
            next_cursor = data.get("next_cursor") if data.get("has_more", True) else None
            return ListingPage(items=data.get("results", []), next_cursor=next_cursor)

        return fetch
