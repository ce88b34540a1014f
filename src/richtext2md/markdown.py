"""Convert rich-text document trees to Markdown with a custom serializer."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from richtext2md.rich_text import parse_rich_text
from richtext2md.schemas import DocumentNode, Mark, NodeKind

_HEADING_PREFIXES = {
    NodeKind.HEADING_1.value: "#",
    NodeKind.HEADING_2.value: "##",
    NodeKind.HEADING_3.value: "###",
}

# Applied innermost first, so bold always ends up outermost.
_MARK_WRAPPERS: tuple[tuple[str, str, str], ...] = (
    (Mark.CODE.value, "`", "`"),
    (Mark.UNDERLINE.value, "<u>", "</u>"),
    (Mark.ITALIC.value, "*", "*"),
    (Mark.BOLD.value, "**", "**"),
)


def convert_rich_text_to_markdown(
    document: DocumentNode | Mapping[str, Any] | None,
) -> str:
    """Serialize a rich-text document into Markdown.

    Node kinds without a dedicated rule render their children with no
    markup, so content from newer editors is never dropped. The function
    never raises on tree shape and always returns the same string for the
    same tree.

    Args:
        document: The root node, or the raw decoded JSON of one. ``None``
            yields an empty string.

    Returns:
        The Markdown text with leading and trailing whitespace removed.
    """
    if document is None:
        return ""
    if not isinstance(document, DocumentNode):
        document = parse_rich_text(document)
    return _serialize_node(document).strip()


def _serialize_node(node: DocumentNode) -> str:
    handler = _HANDLERS.get(node.kind, _serialize_children)
    return handler(node)


def _serialize_children(node: DocumentNode) -> str:
    return "".join(_serialize_node(child) for child in node.children)


def _serialize_heading(node: DocumentNode) -> str:
    return f"{_HEADING_PREFIXES[node.kind]} {_serialize_children(node)}\n\n"


def _serialize_paragraph(node: DocumentNode) -> str:
    return _serialize_children(node) + "\n\n"


def _serialize_text(node: DocumentNode) -> str:
    return apply_marks(node.value, node.marks)


def apply_marks(text: str, marks: tuple[str, ...] | list[str]) -> str:
    """Wrap ``text`` in the markup of each known mark, in a fixed order.

    Repeated and unknown marks are ignored. Input order does not matter.
    """
    present = set(marks)
    for mark, opening, closing in _MARK_WRAPPERS:
        if mark in present:
            text = f"{opening}{text}{closing}"
    return text


def _serialize_hyperlink(node: DocumentNode) -> str:
    return f"[{_serialize_children(node)}]({node.uri or ''})"


def _serialize_unordered_list(node: DocumentNode) -> str:
    return _serialize_children(node) + "\n"


def _serialize_ordered_list(node: DocumentNode) -> str:
    items = "".join(
        f"{index}. {_serialize_node(child)}"
        for index, child in enumerate(node.children, start=1)
    )
    return items + "\n"


def _serialize_list_item(node: DocumentNode) -> str:
    return f"- {_serialize_children(node)}\n"


def _serialize_blockquote(node: DocumentNode) -> str:
    quoted = "".join(f"> {_serialize_node(child)}" for child in node.children)
    return quoted + "\n"


def _serialize_embedded_asset(node: DocumentNode) -> str:
    if not node.asset_id:
        return ""
    return f"\n\n[Asset: {node.asset_id}]\n\n"


def _serialize_horizontal_rule(node: DocumentNode) -> str:  # noqa: ARG001
    return "---\n\n"


_HANDLERS: dict[str, Callable[[DocumentNode], str]] = {
    NodeKind.DOCUMENT.value: _serialize_children,
    NodeKind.HEADING_1.value: _serialize_heading,
    NodeKind.HEADING_2.value: _serialize_heading,
    NodeKind.HEADING_3.value: _serialize_heading,
    NodeKind.PARAGRAPH.value: _serialize_paragraph,
    NodeKind.TEXT.value: _serialize_text,
    NodeKind.HYPERLINK.value: _serialize_hyperlink,
    NodeKind.UNORDERED_LIST.value: _serialize_unordered_list,
    NodeKind.ORDERED_LIST.value: _serialize_ordered_list,
    NodeKind.LIST_ITEM.value: _serialize_list_item,
    NodeKind.BLOCKQUOTE.value: _serialize_blockquote,
    NodeKind.EMBEDDED_ASSET_BLOCK.value: _serialize_embedded_asset,
    NodeKind.HORIZONTAL_RULE.value: _serialize_horizontal_rule,
    "horizontal-rule": _serialize_horizontal_rule,
}
