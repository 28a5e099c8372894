"""Configuration and construction of the Notion storage accessor."""

from typing import Optional

from pydantic import BaseModel

from notion import NotionClient

from .accessor import NotionAccessor, Renderer


class NotionConfig(BaseModel):
    """Settings for the read-only Notion service."""

    token: Optional[str] = None
    # Database listed by ``list("/")``; listing is unavailable without it.
    database_id: Optional[str] = None
    # Prepend page properties as frontmatter on stat/read.
    frontmatter: bool = False
    timeout: float = 30


class NotionServiceBuilder:
    """Chainable builder for ``NotionAccessor``."""

    def __init__(self, config: Optional[NotionConfig] = None) -> None:
        self.config = config or NotionConfig()

    def __repr__(self) -> str:
        return (
            f"NotionServiceBuilder(has_token={'***' if self.config.token else None}, "
            f"database_id={self.config.database_id!r}, frontmatter={self.config.frontmatter})"
        )

    def token(self, token: str) -> "NotionServiceBuilder":
        if token:
            self.config.token = token
        return self

    def database_id(self, database_id: str) -> "NotionServiceBuilder":
        if database_id:
            self.config.database_id = database_id
        return self

    def frontmatter(self, enabled: bool) -> "NotionServiceBuilder":
        self.config.frontmatter = enabled
        return self

    def build(
        self, client: Optional[NotionClient] = None, renderer: Optional[Renderer] = None
    ) -> NotionAccessor:
        if client is None:
            if not self.config.token:
                raise RuntimeError("notion token is required")
            client = NotionClient(self.config.token, timeout=self.config.timeout)
        return NotionAccessor(
            client,
            database_id=self.config.database_id,
            frontmatter=self.config.frontmatter,
            renderer=renderer,
        )
