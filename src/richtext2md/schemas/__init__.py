"""Shared schemas for richtext2md."""

from richtext2md.schemas.assets import AssetDescriptor
from richtext2md.schemas.conversion import ConversionResult
from richtext2md.schemas.entries import BlogEntry, ImportFailure, ImportReport
from richtext2md.schemas.nodes import DocumentNode, Mark, NodeKind

__all__ = [
    "AssetDescriptor",
    "BlogEntry",
    "ConversionResult",
    "DocumentNode",
    "ImportFailure",
    "ImportReport",
    "Mark",
    "NodeKind",
]
