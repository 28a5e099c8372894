"""Cursor-driven enumeration of Notion collections."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional

from loguru import logger

from notion.types import MAX_PAGE_SIZE

from .errors import InvalidInputError, translated


class ListingPage(NamedTuple):
    """One page of results; ``next_cursor`` is None when nothing follows."""

    items: List[Dict[str, Any]]
    next_cursor: Optional[str]


# (cursor, page_size) -> ListingPage. A cursor of None asks for the first page.
FetchPage = Callable[[Optional[str], int], ListingPage]


@dataclass(frozen=True)
class ListingWindow:
    """The ``[offset, offset + limit)`` slice of the full ordered listing."""

    offset: int = 0
    limit: int = 20

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise InvalidInputError("limit must be at least 1", {"limit": self.limit})
        if self.offset < 0:
            raise InvalidInputError("offset must not be negative", {"offset": self.offset})


@dataclass
class ListingResult:
    items: List[Dict[str, Any]] = field(default_factory=list)
    # Items received from the remote, including skipped ones and the rest of
    # the page on which the window filled up.
    total_visited: int = 0

    @property
    def ids(self) -> List[str]:
        return [item["id"] for item in self.items]


class PaginatedLister:
    """Walk a paginated collection from the first cursor to the last.

    Without a window every item is returned, in the remote's order. With a
    window the first ``offset`` items are skipped, at most ``limit`` are
    kept, and no further page is requested once ``limit`` items are held.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        window: Optional[ListingWindow] = None,
        page_size: int = MAX_PAGE_SIZE,
        name: str = "collection",
    ) -> None:
        self.fetch_page = fetch_page
        self.window = window
        self.page_size = page_size
        self.name = name

    def pages(self) -> Iterator[List[Dict[str, Any]]]:
        """Yield each page's items; one remote request per page."""
        cursor: Optional[str] = None
        fetched = 0
        while True:
            with translated(f"list {self.name}"):
                page = self.fetch_page(cursor, self.page_size)
            fetched += 1
            logger.debug(
                f"[storage] {self.name}: page {fetched} had {len(page.items)} items, "
                f"more={page.next_cursor is not None}"
            )
            yield page.items
            if page.next_cursor is None:
                return
            cursor = page.next_cursor

    def run(self) -> ListingResult:
        if self.window is None:
            return self._accumulate_all()
        return self._windowed(self.window)

    def _accumulate_all(self) -> ListingResult:
        result = ListingResult()
        for items in self.pages():
            result.items.extend(items)
            result.total_visited += len(items)
        return result

    def _windowed(self, window: ListingWindow) -> ListingResult:
        result = ListingResult()
        skipped = 0
        for items in self.pages():
            result.total_visited += len(items)
            for item in items:
                if skipped < window.offset:
                    skipped += 1
                    continue
                result.items.append(item)
                if len(result.items) == window.limit:
                    break
            if len(result.items) == window.limit:
                break
        return result
