"""Normalization of Notion page properties into flat typed values."""

from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Union

from notion.page import parse_iso_z
from notion.types import PropertyValue as RawProperty

# Text, Number, Boolean, TextList, Timestamp. bool is checked before float
# wherever the two could be confused.
PropertyValue = Union[str, float, bool, List[str], datetime]
PropertyMap = Dict[str, PropertyValue]

KeyMode = Literal["name", "id"]


def rich_text_to_string(runs: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    """Concatenate rich text runs; None when nothing but whitespace is left."""
    combined = "".join(run.get("plain_text") or "" for run in runs or [])
    trimmed = combined.strip()
    return trimmed or None


def _option_name(option: Optional[Dict[str, Any]]) -> Optional[str]:
    if not option:
        return None
    return option.get("name") or None


def _names(items: Optional[List[Dict[str, Any]]]) -> Optional[List[str]]:
    names = [item["name"] for item in items or [] if item and item.get("name")]
    return names or None


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _timestamp(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_iso_z(value)
    except ValueError:
        return None


def date_to_datetime(value: Optional[Dict[str, Any]]) -> Optional[datetime]:
    """Extract the start of a date property; bare dates become midnight UTC."""
    if not value:
        return None
    start = value.get("start")
    if not start or not isinstance(start, str):
        return None
    if "T" not in start:
        try:
            day = date.fromisoformat(start)
        except ValueError:
            return None
        return datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return _timestamp(start)


_HANDLERS: Dict[str, Callable[[Any], Optional[PropertyValue]]] = {
    "title": rich_text_to_string,
    "rich_text": rich_text_to_string,
    "select": _option_name,
    "status": _option_name,
    "multi_select": _names,
    "checkbox": bool,
    "number": _number,
    "url": lambda v: v or None,
    "email": lambda v: v or None,
    "phone_number": lambda v: v or None,
    "date": date_to_datetime,
    "created_time": _timestamp,
    "last_edited_time": _timestamp,
    "people": _names,
}


def property_to_value(prop: RawProperty) -> Optional[PropertyValue]:
    """Normalize one Notion property, or return None when it carries no value.

    Unknown property kinds (relation, formula, rollup, files, ...) are dropped
    rather than treated as errors.
    """
    ptype = prop.get("type")
    handler = _HANDLERS.get(ptype) if ptype else None
    if handler is None:
        return None
    return handler(prop.get(ptype))


def page_to_properties(properties: Mapping[str, RawProperty], key: KeyMode = "name") -> PropertyMap:
    """Normalize every property of a page, skipping those without a value.

    Args:
        properties: The page's ``properties`` object, keyed by display name
        key: ``"name"`` to key the result by display name, ``"id"`` by property id
    """
    result: PropertyMap = {}
    for name, prop in properties.items():
        value = property_to_value(prop)
        if value is None:
            continue
        result[prop.get("id", name) if key == "id" else name] = value
    return result
