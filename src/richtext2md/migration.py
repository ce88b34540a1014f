"""Migration pipeline for Contentful entries -> Strapi-ready blog entries."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from richtext2md.assets import AssetResolver, build_asset_resolver, collect_embedded_assets
from richtext2md.config import RICHTEXT2MD_DATA_PATH
from richtext2md.contentful import fetch_contentful_entries
from richtext2md.exceptions import ParseError
from richtext2md.file_utils import read_json, write_json_async
from richtext2md.markdown import convert_rich_text_to_markdown
from richtext2md.schemas import BlogEntry

logger = logging.getLogger(__name__)

MIGRATION_FILENAME = "contentful-migration.json"


@dataclass
class MigrationOptions:
    """Options for a Contentful migration run.

    Attributes:
        space_id: Contentful space; falls back to ``CONTENTFUL_SPACE_ID``.
        access_token: Delivery API token; falls back to ``CONTENTFUL_ACCESS_TOKEN``.
        content_type: Content type id to migrate; falls back to
            ``CONTENTFUL_CONTENT_TYPE``.
        environment: Space environment; falls back to ``CONTENTFUL_ENVIRONMENT``.
        rich_text_field: Entry field holding the rich-text body.
        output_path: Where the migrated entries are written.
    """

    space_id: str | None = None
    access_token: str | None = None
    content_type: str | None = None
    environment: str | None = None
    rich_text_field: str = "blogText"
    output_path: Path = field(default_factory=lambda: RICHTEXT2MD_DATA_PATH / MIGRATION_FILENAME)


def build_blog_entry(
    entry: Mapping[str, Any],
    *,
    resolve: AssetResolver | None = None,
    rich_text_field: str = "blogText",
) -> BlogEntry:
    """Map one Contentful entry to a ``BlogEntry``.

    The rich-text body is converted to Markdown and kept verbatim alongside,
    and embedded assets are listed in document order.

    Args:
        entry: A Contentful entry (``sys`` and ``fields``).
        resolve: Asset resolver, usually built from the response ``includes``.
        rich_text_field: Entry field holding the rich-text body.
    """
    fields = entry.get("fields") or {}
    sys = entry.get("sys") or {}
    rich_text = fields.get(rich_text_field)
    if not isinstance(rich_text, Mapping):
        rich_text = None

    published_at = _str_or_none(sys.get("publishedAt"))

    return BlogEntry(
        name=_str_or_none(fields.get("name")) or _str_or_none(fields.get("title")) or "Untitled",
        slug=_str_or_none(fields.get("slug")) or _str_or_none(sys.get("id")) or "",
        blog_text=convert_rich_text_to_markdown(rich_text) if rich_text else "",
        contentful_rich_text=dict(rich_text) if rich_text else None,
        tags=_tag_list(fields.get("tags")),
        status="published" if published_at else "draft",
        content_type=_str_or_none(fields.get("contentType"))
        or _link_id(sys.get("contentType"))
        or "Blog",
        author=_str_or_none(fields.get("createdBy")) or _link_id(sys.get("createdBy")),
        last_updated_by=_str_or_none(fields.get("lastUpdatedBy"))
        or _link_id(sys.get("updatedBy")),
        published_date=published_at or _str_or_none(sys.get("createdAt")),
        embedded_assets=collect_embedded_assets(rich_text, resolve) if rich_text else [],
        contentful_id=_str_or_none(sys.get("id")),
        created_at=_str_or_none(sys.get("createdAt")),
        updated_at=_str_or_none(sys.get("updatedAt")),
    )


def migrate_entries(
    payload: Mapping[str, Any], *, rich_text_field: str = "blogText"
) -> list[BlogEntry]:
    """Map every entry of a Contentful response payload.

    Entries that cannot be mapped are logged and skipped so the rest of the
    batch still migrates.
    """
    resolve = build_asset_resolver(payload.get("includes"))
    migrated: list[BlogEntry] = []
    for entry in payload.get("items") or []:
        try:
            blog = build_blog_entry(entry, resolve=resolve, rich_text_field=rich_text_field)
        except ValidationError as exc:
            entry_id = (entry.get("sys") or {}).get("id")
            logger.warning("Skipping entry %s: %s", entry_id, exc)
            continue
        logger.info("Processed: %s", blog.name)
        migrated.append(blog)
    return migrated


async def migrate_from_contentful(
    options: MigrationOptions | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> list[BlogEntry]:
    """Fetch entries from Contentful, convert them and save the result.

    Args:
        options: Migration options. Uses defaults if None.
        client: Optional httpx.AsyncClient for connection pooling.

    Returns:
        The migrated entries, also written to ``options.output_path``.

    Raises:
        ConfigurationError: If Contentful credentials are missing.
        FetchError: If the entries cannot be fetched.
    """
    opts = options or MigrationOptions()
    logger.info("Fetching entries from Contentful")
    payload = await fetch_contentful_entries(
        space_id=opts.space_id,
        access_token=opts.access_token,
        content_type=opts.content_type,
        environment=opts.environment,
        client=client,
    )
    logger.info("Found %d entries", len(payload.get("items") or []))

    migrated = migrate_entries(payload, rich_text_field=opts.rich_text_field)
    await write_json_async(
        opts.output_path, [entry.model_dump(mode="json", by_alias=True) for entry in migrated]
    )
    logger.info("Migration data saved to %s", opts.output_path)
    return migrated


def load_migration_file(path: Path) -> list[BlogEntry]:
    """Load entries previously written by ``migrate_from_contentful``.

    Raises:
        SourceNotAvailableError: If the file does not exist.
        ParseError: If the file is not a JSON list of entries.
    """
    data = read_json(path)
    if not isinstance(data, list):
        raise ParseError(f"Expected a list of entries in {path}")
    try:
        return [BlogEntry.model_validate(item) for item in data]
    except ValidationError as exc:
        raise ParseError(f"Invalid entry in {path}: {exc}") from exc


def _tag_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(tag) for tag in value if tag]


def _link_id(link: Any) -> str | None:
    if not isinstance(link, Mapping):
        return None
    return _str_or_none((link.get("sys") or {}).get("id"))


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None
