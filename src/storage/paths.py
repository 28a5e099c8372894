"""Mapping of accessor paths to Notion page ids."""

from .errors import NotFoundError

DOCUMENT_SUFFIX = ".md"


def is_root(path: str) -> bool:
    return path in ("", "/")


def is_root_dir(path: str) -> bool:
    """Root check used by listing, which also accepts the dotted spellings."""
    return is_root(path) or path in ("./", "/.")


def parse_page_path(path: str) -> str:
    """Turn ``<page id>.md`` into ``<page id>``.

    The namespace is flat: anything with a separator or a parent segment
    does not exist. Callers handle the root path before calling this.
    """
    if ".." in path or "/" in path:
        raise NotFoundError("nested paths are not supported", {"path": path})

    page_id = path[: -len(DOCUMENT_SUFFIX)] if path.endswith(DOCUMENT_SUFFIX) else path
    if not page_id:
        raise NotFoundError("page id is required in path", {"path": path})
    return page_id


def entry_name(page_id: str) -> str:
    return f"{page_id}{DOCUMENT_SUFFIX}"
