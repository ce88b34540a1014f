"""richtext2md: convert Contentful rich text into Markdown."""

from richtext2md.assets import build_asset_resolver, collect_embedded_assets
from richtext2md.exceptions import (
    ConfigurationError,
    FetchError,
    ImportFailedError,
    ParseError,
    RateLimitError,
    RichText2mdError,
    SourceNotAvailableError,
)
from richtext2md.markdown import convert_rich_text_to_markdown
from richtext2md.migration import MigrationOptions, build_blog_entry, migrate_entries
from richtext2md.rich_text import load_rich_text, parse_rich_text
from richtext2md.schemas import AssetDescriptor, BlogEntry, DocumentNode, Mark, NodeKind

__all__ = [
    "AssetDescriptor",
    "BlogEntry",
    "ConfigurationError",
    "DocumentNode",
    "FetchError",
    "ImportFailedError",
    "Mark",
    "MigrationOptions",
    "NodeKind",
    "ParseError",
    "RateLimitError",
    "RichText2mdError",
    "SourceNotAvailableError",
    "build_asset_resolver",
    "build_blog_entry",
    "collect_embedded_assets",
    "convert_rich_text_to_markdown",
    "load_rich_text",
    "migrate_entries",
    "parse_rich_text",
]
