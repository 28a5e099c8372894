import sys
import time
from enum import Enum

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from loguru import logger

from notion import NotionClient, NotionDatabase
from storage import ErrorKind, ListingWindow, NotionAccessor, StorageError
from storage.properties import KeyMode

from .auth import token_from_headers
from .settings import settings

logger.remove()
logger.add(sys.stderr, level=settings.log_level)

app = FastAPI(title="Notion to Markdown")

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.PERMISSION_DENIED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_A_DIRECTORY: 400,
    ErrorKind.UNSUPPORTED: 400,
    ErrorKind.UNEXPECTED: 500,
}


class PageFormat(str, Enum):
    JSON = "json"
    MARKDOWN = "markdown"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    path = request.url.path
    if request.url.query:
        path += f"?{request.url.query}"
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"handled {request.method} {path} -> {response.status_code} in {elapsed_ms:.0f}ms")
    return response


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"error": exc.kind.value, "message": exc.message},
    )


def build_accessor(token: str) -> NotionAccessor:
    return NotionAccessor(NotionClient(token, timeout=settings.notion_timeout))


def get_accessor(request: Request) -> NotionAccessor:
    token = token_from_headers(request.headers)
    if not token:
        logger.warning("missing Notion token in request headers")
        raise HTTPException(status_code=401, detail="missing Notion token")
    return build_accessor(token)


def check_id(kind: str, value: str) -> None:
    if "/" in value or ".." in value:
        logger.warning(f"invalid {kind} id: {value}")
        raise HTTPException(status_code=400, detail=f"invalid {kind} id")


def page_response_format(request: Request) -> PageFormat:
    """Pick markdown or JSON from Content-Type, then Accept. Defaults to JSON."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("text/markdown"):
        return PageFormat.MARKDOWN

    for item in request.headers.get("accept", "").split(","):
        item = item.strip()
        if item.startswith("text/markdown") or item.startswith("text/*"):
            return PageFormat.MARKDOWN
        if item.startswith("application/json") or item.startswith("application/*"):
            return PageFormat.JSON
        if item == "*/*":
            return PageFormat.JSON
    return PageFormat.JSON


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.get("/page/{page_id}")
def get_page(
    page_id: str,
    request: Request,
    frontmatter: bool = False,
    property_keys: KeyMode = "name",
) -> Response:
    check_id("page", page_id)
    accessor = get_accessor(request)

    fmt = page_response_format(request)
    document = accessor.load_document(page_id, property_keys=property_keys)
    if fmt is PageFormat.MARKDOWN:
        return Response(
            content=document.content(frontmatter),
            media_type="text/markdown; charset=utf-8",
        )
    return JSONResponse(
        content=jsonable_encoder(
            {"id": document.id, "properties": document.properties, "content": document.markdown}
        )
    )


@app.get("/database/{database_id}")
def list_database_pages(
    database_id: str,
    request: Request,
    offset: int = 0,
    limit: int = 20,
    debug: bool = False,
) -> dict:
    check_id("database", database_id)
    accessor = get_accessor(request)
    if limit == 0:
        logger.warning(f"limit of zero requested for database {database_id}")
    window = ListingWindow(offset=offset, limit=limit)

    result = accessor.list_database(database_id, window)
    out = {
        "total": result.total_visited,
        "offset": offset,
        "limit": limit,
        "pages": result.ids,
    }
    if debug:
        db = NotionDatabase(accessor.client, database_id)
        out["summaries"] = db.summarize_pages(result.items)
    logger.info(f"database {database_id}: returned {len(result.items)} of {result.total_visited} visited")
    return out


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
