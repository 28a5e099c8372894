"""Read-only storage interface over Notion pages and databases."""

from .accessor import Document, NotionAccessor, NotionLister
from .builder import NotionConfig, NotionServiceBuilder
from .errors import (
    ErrorKind,
    InvalidInputError,
    NotDirectoryError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    UnexpectedError,
    UnsupportedError,
    translate_error,
)
from .lister import ListingWindow, PaginatedLister
from .types import ByteRange, Entry, EntryMode, Metadata, ReadResult

__all__ = [
    "ByteRange",
    "Document",
    "Entry",
    "EntryMode",
    "ErrorKind",
    "InvalidInputError",
    "ListingWindow",
    "Metadata",
    "NotDirectoryError",
    "NotFoundError",
    "NotionAccessor",
    "NotionConfig",
    "NotionLister",
    "NotionServiceBuilder",
    "PaginatedLister",
    "PermissionDeniedError",
    "ReadResult",
    "StorageError",
    "UnexpectedError",
    "UnsupportedError",
    "translate_error",
]
