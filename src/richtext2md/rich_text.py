"""Parse Contentful rich-text JSON into document trees."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from richtext2md.exceptions import ParseError
from richtext2md.schemas import DocumentNode


def parse_rich_text(data: Mapping[str, Any]) -> DocumentNode:
    """Build a ``DocumentNode`` tree from a decoded rich-text value.

    Missing or malformed fields fall back to neutral defaults, so any mapping
    produces a tree. Non-mapping entries in ``content`` are skipped.

    Args:
        data: A rich-text node as decoded from JSON, usually the root
            ``{"nodeType": "document", ...}`` value.

    Returns:
        The root node of the parsed tree.
    """
    node_data = data.get("data")
    if not isinstance(node_data, Mapping):
        node_data = {}

    value = data.get("value")
    content = data.get("content")
    children = (
        tuple(parse_rich_text(child) for child in content if isinstance(child, Mapping))
        if isinstance(content, list)
        else ()
    )

    return DocumentNode(
        kind=_as_str(data.get("nodeType")) or "",
        children=children,
        value=value if isinstance(value, str) else "",
        marks=_parse_marks(data.get("marks")),
        uri=_as_str(node_data.get("uri")),
        asset_id=_target_id(node_data),
    )


def load_rich_text(text: str) -> DocumentNode:
    """Decode a JSON string and parse it as a rich-text document.

    Raises:
        ParseError: If ``text`` is not JSON or does not decode to an object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid rich-text JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ParseError("Rich-text JSON must be an object")
    return parse_rich_text(data)


def _parse_marks(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    marks: list[str] = []
    for mark in raw:
        if isinstance(mark, Mapping):
            mark = mark.get("type")
        if isinstance(mark, str) and mark:
            marks.append(mark)
    return tuple(marks)


def _target_id(node_data: Mapping[str, Any]) -> str | None:
    target = node_data.get("target")
    if not isinstance(target, Mapping):
        return None
    sys = target.get("sys")
    if not isinstance(sys, Mapping):
        return None
    return _as_str(sys.get("id"))


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
