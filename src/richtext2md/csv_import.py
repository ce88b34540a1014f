"""Read blog entries from a CSV export."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Mapping
from pathlib import Path

from richtext2md.exceptions import SourceNotAvailableError
from richtext2md.schemas import BlogEntry

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = (
    "Name",
    "Content Type",
    "Updated",
    "Last updated by",
    "Blog Text",
    "Created",
    "Published",
    "Created by",
    "Tags",
    "Slug",
    "status",
)

# Accepted spellings per field, first non-empty value wins.
_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("Name", "name"),
    "slug": ("Slug", "slug"),
    "blog_text": ("Blog Text", "blogText", "Blog text"),
    "status": ("status", "Status"),
    "content_type": ("Content Type", "contentType"),
    "author": ("Created by", "createdBy", "author"),
    "last_updated_by": ("Last updated by", "lastUpdatedBy"),
    "published_date": ("Published", "published", "Created", "created"),
}


def read_blog_csv(path: Path) -> list[BlogEntry]:
    """Parse a blog CSV export into entries.

    Args:
        path: CSV file with a header row, see ``EXPECTED_COLUMNS``.

    Returns:
        One entry per data row, in file order.

    Raises:
        SourceNotAvailableError: If the file does not exist.
    """
    if not path.is_file():
        raise SourceNotAvailableError(
            f"CSV file not found at {path}. Expected columns: {', '.join(EXPECTED_COLUMNS)}"
        )
    with path.open(newline="", encoding="utf-8-sig") as handle:
        entries = [row_to_entry(row) for row in csv.DictReader(handle)]
    logger.info("Found %d entries in %s", len(entries), path)
    return entries


def row_to_entry(row: Mapping[str, str | None]) -> BlogEntry:
    """Map one CSV row to a ``BlogEntry`` using tolerant column lookup."""
    values = {name: _first_value(row, aliases) for name, aliases in _COLUMN_ALIASES.items()}
    return BlogEntry(
        name=values["name"] or "Untitled",
        slug=values["slug"] or "",
        blog_text=values["blog_text"] or "",
        tags=parse_tags(row.get("Tags") or row.get("tags")),
        status=(values["status"] or "").lower() or "draft",
        content_type=values["content_type"] or "Blog",
        author=values["author"] or "",
        last_updated_by=values["last_updated_by"] or "",
        published_date=values["published_date"],
    )


def parse_tags(raw: str | None) -> list[str]:
    """Parse a tags cell holding a JSON array or a comma-separated list."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, list):
        return [str(tag).strip() for tag in parsed if str(tag).strip()]
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _first_value(row: Mapping[str, str | None], aliases: tuple[str, ...]) -> str | None:
    for column in aliases:
        value = row.get(column)
        if value:
            return value
    return None
