"""Rich-text document tree models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(str, Enum):
    """Node kinds the Markdown serializer knows how to render."""

    DOCUMENT = "document"
    HEADING_1 = "heading-1"
    HEADING_2 = "heading-2"
    HEADING_3 = "heading-3"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    HYPERLINK = "hyperlink"
    UNORDERED_LIST = "unordered-list"
    ORDERED_LIST = "ordered-list"
    LIST_ITEM = "list-item"
    BLOCKQUOTE = "blockquote"
    EMBEDDED_ASSET_BLOCK = "embedded-asset-block"
    HORIZONTAL_RULE = "hr"


class Mark(str, Enum):
    """Inline style marks, in the order they are applied."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    CODE = "code"


class DocumentNode(BaseModel):
    """A node in a rich-text document tree.

    ``kind`` is kept as the raw tag so that node kinds introduced upstream
    survive parsing; compare against ``NodeKind`` values to dispatch.
    Only the fields relevant to a node's kind are populated, the rest keep
    their neutral defaults.

    Attributes:
        kind: Node tag, e.g. ``"paragraph"``.
        children: Child nodes in document order.
        value: Literal text of a ``text`` node.
        marks: Style marks of a ``text`` node, as found in the source.
        uri: Link target of a ``hyperlink`` node.
        asset_id: Referenced asset of an ``embedded-asset-block`` node.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    children: tuple["DocumentNode", ...] = Field(default_factory=tuple)
    value: str = ""
    marks: tuple[str, ...] = Field(default_factory=tuple)
    uri: str | None = None
    asset_id: str | None = None
