"""List the configured database and print one page through the storage accessor.

Usage:
    NOTION_TOKEN=... NOTION_DB_ID=... NOTION_PAGE_ID=... python scripts/notion_list.py
"""

import os

from loguru import logger

from app.settings import settings
from storage import NotionServiceBuilder, StorageError


def main() -> None:
    builder = NotionServiceBuilder().token(settings.notion_token or "").frontmatter(
        settings.notion_frontmatter
    )
    if settings.notion_db_id:
        builder = builder.database_id(settings.notion_db_id)
    accessor = builder.build()

    try:
        if accessor.info().capability.list:
            print(f"Listing pages in database: {settings.notion_db_id}")
            for entry in accessor.list("/"):
                print(f" - {entry.path}")
        else:
            print("NOTION_DB_ID not set; skipping list")

        page_id = os.getenv("NOTION_PAGE_ID")
        if page_id:
            path = f"{page_id}.md"
            result = accessor.read(path)
            print(f"\n--- Page {path} ---\n{result.content.decode('utf-8', errors='replace')}")
        else:
            print("NOTION_PAGE_ID not set; skipping read")
    except StorageError as e:
        logger.error(f"notion access failed: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
