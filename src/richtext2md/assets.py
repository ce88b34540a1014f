"""Collect embedded asset references from rich-text document trees."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from richtext2md.rich_text import parse_rich_text
from richtext2md.schemas import AssetDescriptor, DocumentNode, NodeKind

logger = logging.getLogger(__name__)

AssetResolver = Callable[[str], "Mapping[str, Any] | None"]

_RESOLVED_FIELDS = ("url", "title", "content_type")


def collect_embedded_assets(
    document: DocumentNode | Mapping[str, Any] | None,
    resolve: AssetResolver | None = None,
) -> list[AssetDescriptor]:
    """Collect one descriptor per embedded asset block, in document order.

    Repeated references produce repeated descriptors. Blocks without a
    reference are skipped.

    Args:
        document: The root node, or the raw decoded JSON of one.
        resolve: Optional lookup from asset id to a mapping with ``url``,
            ``title`` and ``content_type`` keys. When it returns ``None`` or
            raises, the descriptor carries the id only.

    Returns:
        The descriptors in depth-first pre-order.
    """
    if document is None:
        return []
    if not isinstance(document, DocumentNode):
        document = parse_rich_text(document)
    return list(_walk(document, resolve))


def _walk(
    node: DocumentNode, resolve: AssetResolver | None
) -> Iterable[AssetDescriptor]:
    if node.kind == NodeKind.EMBEDDED_ASSET_BLOCK.value and node.asset_id:
        yield _describe(node.asset_id, resolve)
    for child in node.children:
        yield from _walk(child, resolve)


def _describe(asset_id: str, resolve: AssetResolver | None) -> AssetDescriptor:
    if resolve is None:
        return AssetDescriptor(id=asset_id)
    try:
        resolved = resolve(asset_id)
    except Exception as exc:
        logger.debug("Asset resolution failed for %s: %s", asset_id, exc)
        return AssetDescriptor(id=asset_id)
    if not resolved:
        return AssetDescriptor(id=asset_id)
    fields = {
        key: resolved[key]
        for key in _RESOLVED_FIELDS
        if isinstance(resolved.get(key), str)
    }
    return AssetDescriptor(id=asset_id, **fields)


def build_asset_resolver(includes: Mapping[str, Any] | None) -> AssetResolver:
    """Build a resolver from the ``includes`` block of a Contentful response.

    Args:
        includes: The ``includes`` mapping; its ``Asset`` list is indexed by
            ``sys.id``.

    Returns:
        A callable mapping an asset id to ``url``/``title``/``content_type``,
        or ``None`` for unknown ids.
    """
    index: dict[str, dict[str, Any]] = {}
    assets = (includes or {}).get("Asset") or []
    for asset in assets:
        if not isinstance(asset, Mapping):
            continue
        asset_id = (asset.get("sys") or {}).get("id")
        if not asset_id:
            continue
        fields = asset.get("fields") or {}
        file_info = fields.get("file") or {}
        index[asset_id] = {
            "url": file_info.get("url"),
            "title": fields.get("title"),
            "content_type": file_info.get("contentType"),
        }
    return index.get
