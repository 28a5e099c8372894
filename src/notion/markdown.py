"""Rendering of Notion page content (block children) as markdown."""

from typing import Any, Dict, List, Optional

from loguru import logger

from .client import NotionClient

LIST_BLOCKS = ("bulleted_list_item", "numbered_list_item", "to_do")
HEADINGS = {"heading_1": "#", "heading_2": "##", "heading_3": "###"}
INDENT = "    "


def rich_text_to_markdown(rich_text: List[Dict[str, Any]]) -> str:
    """Convert a Notion rich_text array to inline markdown."""
    parts = []
    for item in rich_text or []:
        if item.get("type") == "equation":
            parts.append(f"${item.get('equation', {}).get('expression', '')}$")
            continue

        text = item.get("plain_text", "")
        if not text:
            continue
        annotations = item.get("annotations") or {}
        if annotations.get("code"):
            text = f"`{text}`"
        else:
            # Keep surrounding whitespace outside the markers or markdown won't parse them.
            stripped = text.strip()
            lead = text[: len(text) - len(text.lstrip())]
            trail = text[len(text.rstrip()) :]
            if stripped:
                if annotations.get("strikethrough"):
                    stripped = f"~~{stripped}~~"
                if annotations.get("italic"):
                    stripped = f"*{stripped}*"
                if annotations.get("bold"):
                    stripped = f"**{stripped}**"
                text = f"{lead}{stripped}{trail}"
        href = item.get("href")
        if href:
            text = f"[{text}]({href})"
        parts.append(text)
    return "".join(parts)


class MarkdownRenderer:
    """Renders a page's block tree by walking ``blocks/{id}/children``."""

    def __init__(self, client: NotionClient, max_depth: int = 8) -> None:
        self.client = client
        self.max_depth = max_depth

    def render(self, page_id: str) -> str:
        blocks = self.children(page_id)
        markdown = self._render_blocks(blocks, depth=0)
        logger.debug(f"[notion] rendered {page_id}: {len(blocks)} top-level blocks")
        return markdown + "\n" if markdown else ""

    def children(self, block_id: str) -> List[Dict[str, Any]]:
        """Fetch every child block, following the cursor until exhausted."""
        from storage.lister import ListingPage, PaginatedLister

        def fetch(cursor: Optional[str], page_size: int) -> ListingPage:
            params: Dict[str, Any] = {"page_size": page_size}
            if cursor is not None:
                params["start_cursor"] = cursor
            data = self.client.get(f"blocks/{block_id}/children", params=params)
            next_cursor = data.get("next_cursor") if data.get("has_more") else None
            return ListingPage(items=data.get("results", []), next_cursor=next_cursor)

        return PaginatedLister(fetch, name=f"block {block_id}").run().items

    def _render_blocks(self, blocks: List[Dict[str, Any]], depth: int) -> str:
        out: List[str] = []
        prev_type: Optional[str] = None
        number = 0
        for block in blocks:
            btype = block.get("type", "")
            number = number + 1 if btype == "numbered_list_item" else 0
            rendered = self._render_block(block, depth, number)
            if rendered is None:
                continue
            if out:
                tight = prev_type in LIST_BLOCKS and btype in LIST_BLOCKS
                out.append("\n" if tight else "\n\n")
            out.append(rendered)
            prev_type = btype
        return "".join(out)

    def _render_block(self, block: Dict[str, Any], depth: int, number: int) -> Optional[str]:
        btype = block.get("type", "")
        data = block.get(btype) or {}
        text = rich_text_to_markdown(data.get("rich_text", []))

        if btype == "paragraph":
            body = text
        elif btype in HEADINGS:
            body = f"{HEADINGS[btype]} {text}"
        elif btype == "bulleted_list_item":
            body = f"- {text}"
        elif btype == "numbered_list_item":
            body = f"{number}. {text}"
        elif btype == "to_do":
            body = f"- [{'x' if data.get('checked') else ' '}] {text}"
        elif btype == "quote":
            body = f"> {text}"
        elif btype == "callout":
            emoji = (data.get("icon") or {}).get("emoji")
            body = f"> {emoji} {text}" if emoji else f"> {text}"
        elif btype == "toggle":
            body = f"- {text}"
        elif btype == "code":
            code = "".join(t.get("plain_text", "") for t in data.get("rich_text", []))
            body = f"```{data.get('language', '')}\n{code}\n```"
        elif btype == "equation":
            body = f"$$\n{data.get('expression', '')}\n$$"
        elif btype == "divider":
            body = "---"
        elif btype in ("image", "file", "pdf", "video"):
            source = data.get("file") or data.get("external") or {}
            caption = rich_text_to_markdown(data.get("caption", [])) or btype
            prefix = "!" if btype == "image" else ""
            body = f"{prefix}[{caption}]({source.get('url', '')})"
        elif btype in ("bookmark", "embed", "link_preview"):
            url = data.get("url", "")
            body = f"[{rich_text_to_markdown(data.get('caption', [])) or url}]({url})"
        elif btype == "child_page":
            body = f"[{data.get('title', '')}]({block.get('id', '')}.md)"
        elif btype == "table":
            body = self._render_table(block, data)
        elif btype in ("column_list", "column", "synced_block"):
            # Containers only; their content lives in the children.
            return self._render_nested(block, depth, indent=False) or None
        else:
            logger.debug(f"[notion] skipping unsupported block type {btype!r}")
            return None

        nested = self._render_nested(block, depth, indent=btype != "table")
        return f"{body}\n{nested}" if nested else body

    def _render_nested(self, block: Dict[str, Any], depth: int, indent: bool) -> str:
        if not block.get("has_children") or block.get("type") == "table":
            return ""
        if depth + 1 > self.max_depth:
            logger.warning(f"[notion] block {block.get('id')} nested too deep, truncating")
            return ""
        rendered = self._render_blocks(self.children(block["id"]), depth + 1)
        if not indent:
            return rendered
        return "\n".join(INDENT + line if line else line for line in rendered.split("\n"))

    def _render_table(self, block: Dict[str, Any], data: Dict[str, Any]) -> str:
        rows = [
            [rich_text_to_markdown(cell) for cell in row.get("table_row", {}).get("cells", [])]
            for row in self.children(block["id"])
            if row.get("type") == "table_row"
        ]
        if not rows:
            return ""
        width = data.get("table_width") or max(len(r) for r in rows)
        rows = [r + [""] * (width - len(r)) for r in rows]
        lines = ["| " + " | ".join(rows[0]) + " |", "|" + " --- |" * width]
        lines.extend("| " + " | ".join(r) + " |" for r in rows[1:])
        return "\n".join(lines)
