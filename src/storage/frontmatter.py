"""Frontmatter rendering for normalized page properties."""

from datetime import datetime

from .properties import PropertyMap, PropertyValue


def value_to_string(value: PropertyValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, list):
        return ", ".join(value)
    if isinstance(value, datetime):
        if value.microsecond % 1000 == 0:
            return value.isoformat(timespec="milliseconds" if value.microsecond else "seconds")
        return value.isoformat()
    return value


def escape(value: str) -> str:
    # Backslash must go first or it would re-escape the other two.
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def apply_frontmatter(properties: PropertyMap, markdown: str) -> str:
    """Prepend a sorted ``key: "value"`` block to ``markdown``.

    Returns ``markdown`` untouched when there are no properties.
    """
    if not properties:
        return markdown

    lines = ["---\n"]
    for key in sorted(properties):
        lines.append(f'{key}: "{escape(value_to_string(properties[key]))}"\n')
    lines.append("---\n\n")
    return "".join(lines) + markdown
