"""Test setup for richtext2md."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def text(value: str, *marks: str) -> dict[str, Any]:
    """Build a Contentful text node."""
    return {
        "nodeType": "text",
        "value": value,
        "marks": [{"type": mark} for mark in marks],
        "data": {},
    }


def node(node_type: str, *content: dict[str, Any], **data: Any) -> dict[str, Any]:
    """Build a Contentful block or inline node."""
    return {"nodeType": node_type, "data": data, "content": list(content)}


def asset_block(asset_id: str) -> dict[str, Any]:
    """Build an embedded asset block referencing ``asset_id``."""
    return {
        "nodeType": "embedded-asset-block",
        "data": {"target": {"sys": {"id": asset_id, "type": "Link", "linkType": "Asset"}}},
        "content": [],
    }


@pytest.fixture
def blog_document() -> dict[str, Any]:
    """A blog body covering every supported node kind."""
    return node(
        "document",
        node("heading-1", text("Introduction: What Slotopia Casino Slots Offer", "bold")),
        node(
            "paragraph",
            text("Slotopia is a collection of slot games built for "),
            text("quick", "italic"),
            text(", colorful play. See "),
            node("hyperlink", text("the lobby"), uri="https://example.com/lobby"),
            text("."),
        ),
        asset_block("hero-image"),
        node("heading-2", text("Volatility")),
        node(
            "unordered-list",
            node("list-item", text("Low")),
            node("list-item", text("High")),
        ),
        node("hr"),
        node("blockquote", node("paragraph", text("Play responsibly."))),
    )


@pytest.fixture
def contentful_includes() -> dict[str, Any]:
    """An ``includes`` block resolving the ``hero-image`` asset."""
    return {
        "Asset": [
            {
                "sys": {"id": "hero-image", "type": "Asset"},
                "fields": {
                    "title": "Hero image",
                    "file": {
                        "url": "//images.ctfassets.net/space/hero.png",
                        "contentType": "image/png",
                    },
                },
            }
        ]
    }
