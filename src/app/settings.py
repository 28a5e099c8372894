from typing import Optional

from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


class Settings(BaseModel):
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    notion_timeout: float = float(os.getenv("NOTION_TIMEOUT", "30"))
    # Only used by the operator script; the server reads tokens from request headers.
    notion_token: Optional[str] = os.getenv("NOTION_TOKEN") or None
    notion_db_id: Optional[str] = os.getenv("NOTION_DB_ID") or None
    notion_frontmatter: bool = os.getenv("NOTION_FRONTMATTER", "false").lower() in ("1", "true", "yes")


settings = Settings()
