"""Result types returned across the storage interface."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class EntryMode(str, Enum):
    FILE = "file"
    DIR = "dir"


@dataclass
class Metadata:
    mode: EntryMode
    content_length: Optional[int] = None
    content_type: Optional[str] = None
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class Entry:
    path: str
    metadata: Metadata


@dataclass(frozen=True)
class ByteRange:
    """A byte range request; the default covers the whole content."""

    offset: int = 0
    size: Optional[int] = None

    def is_full(self) -> bool:
        return self.offset == 0 and self.size is None


@dataclass
class ReadResult:
    size: int
    content: bytes


@dataclass(frozen=True)
class Capability:
    stat: bool = False
    read: bool = False
    list: bool = False


@dataclass(frozen=True)
class AccessorInfo:
    scheme: str = "notion"
    root: str = "/"
    capability: Capability = field(default_factory=Capability)
