"""Storage error taxonomy and translation of Notion failures into it."""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Generator, Optional, Type

import httpx
from loguru import logger

from notion.errors import NotionAPIError, NotionError


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    PERMISSION_DENIED = "PermissionDenied"
    NOT_FOUND = "NotFound"
    NOT_A_DIRECTORY = "NotADirectory"
    UNSUPPORTED = "Unsupported"
    UNEXPECTED = "Unexpected"


class StorageError(Exception):
    """An error crossing the storage-interface boundary."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def with_context(self, key: str, value: Any) -> "StorageError":
        self.context[key] = value
        return self

    def __str__(self) -> str:
        if not self.context:
            return f"{self.kind.value}: {self.message}"
        ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.kind.value}: {self.message} ({ctx})"


class InvalidInputError(StorageError):
    kind = ErrorKind.INVALID_INPUT


class PermissionDeniedError(StorageError):
    kind = ErrorKind.PERMISSION_DENIED


class NotFoundError(StorageError):
    kind = ErrorKind.NOT_FOUND


class NotDirectoryError(StorageError):
    kind = ErrorKind.NOT_A_DIRECTORY


class UnsupportedError(StorageError):
    kind = ErrorKind.UNSUPPORTED


class UnexpectedError(StorageError):
    kind = ErrorKind.UNEXPECTED


STATUS_ERRORS: Dict[int, Type[StorageError]] = {
    400: InvalidInputError,
    401: PermissionDeniedError,
    403: PermissionDeniedError,
    404: NotFoundError,
}


def translate_error(exc: BaseException) -> StorageError:
    """Map a failure raised by a Notion collaborator to a StorageError.

    Status-coded API errors go through ``STATUS_ERRORS``; everything else
    (transport, decoding, header problems, unknown shapes) becomes Unexpected
    and is logged, since none of those are anticipated.
    """
    if isinstance(exc, StorageError):
        return exc

    if isinstance(exc, NotionAPIError):
        error_cls = STATUS_ERRORS.get(exc.status, UnexpectedError)
        error = error_cls(exc.message, {"status": exc.status})
        if exc.code:
            error.with_context("code", exc.code)
    elif isinstance(exc, (NotionError, httpx.HTTPError)):
        error = UnexpectedError(str(exc), {"source": type(exc).__name__})
    else:
        error = UnexpectedError(str(exc) or type(exc).__name__, {"source": type(exc).__name__})

    if error.kind is ErrorKind.UNEXPECTED:
        logger.error(f"[storage] notion error: {exc!r}")
    else:
        logger.debug(f"[storage] notion error translated to {error.kind.value}: {exc}")
    return error


@contextmanager
def translated(operation: str) -> Generator[None, None, None]:
    """Translate anything raised inside the block, tagging it with ``operation``."""
    try:
        yield
    except StorageError:
        raise
    except Exception as e:
        raise translate_error(e).with_context("operation", operation) from e
