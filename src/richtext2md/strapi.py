"""Strapi REST client for the blog collection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import httpx

from richtext2md.config import STRAPI_API_TOKEN, STRAPI_URL
from richtext2md.exceptions import FetchError, ImportFailedError, SourceNotAvailableError
from richtext2md.http_utils import create_client, request_json_with_retries
from richtext2md.schemas import BlogEntry, ImportFailure, ImportReport

logger = logging.getLogger(__name__)

BLOGS_PATH = "/api/blogs"

# Attributes of the Strapi blog collection type.
_STRAPI_FIELDS = frozenset(
    {
        "name",
        "slug",
        "blog_text",
        "contentful_rich_text",
        "tags",
        "status",
        "content_type",
        "author",
        "last_updated_by",
        "published_date",
    }
)

_RULE = "─"


def build_blog_payload(entry: BlogEntry) -> dict[str, Any]:
    """Build the ``{"data": ...}`` body for creating a blog in Strapi.

    Published entries get ``publishedAt`` set to their publish date; drafts
    send ``null`` so Strapi keeps them unpublished.
    """
    data = entry.model_dump(mode="json", by_alias=True, include=set(_STRAPI_FIELDS))
    data["publishedAt"] = entry.published_date if entry.is_published else None
    return {"data": data}


class StrapiClient:
    """Async client for the Strapi ``/api/blogs`` endpoints.

    Use as an async context manager, or pass an existing ``httpx.AsyncClient``
    whose lifecycle the caller owns.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        api_token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or STRAPI_URL).rstrip("/")
        token = api_token if api_token is not None else STRAPI_API_TOKEN
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> StrapiClient:
        if self._client is None:
            self._client = create_client(headers=self._headers)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> Any:
        if self._client is None:
            raise RuntimeError("StrapiClient must be used as an async context manager")
        return await request_json_with_retries(
            method,
            f"{self.base_url}{path}",
            client=self._client,
            headers=self._headers,
            **kwargs,
        )

    async def check_connection(self) -> None:
        """Verify that the blog collection is reachable.

        Raises:
            FetchError: If Strapi cannot be reached or rejects the request.
        """
        await self._request("GET", BLOGS_PATH, max_retries=0)

    async def create_blog(self, entry: BlogEntry) -> dict[str, Any]:
        """Create one blog entry and return the stored record.

        Raises:
            ImportFailedError: If Strapi rejects the entry.
        """
        try:
            response = await self._request(
                "POST", BLOGS_PATH, json_body=build_blog_payload(entry), max_retries=0
            )
        except FetchError as exc:
            raise ImportFailedError(f"Failed to import {entry.name!r}: {exc}") from exc
        return (response or {}).get("data") or {}

    async def list_blogs(self) -> list[dict[str, Any]]:
        """Return every blog with its relations populated."""
        response = await self._request("GET", BLOGS_PATH, params={"populate": "*"})
        data = (response or {}).get("data")
        return data if isinstance(data, list) else []

    async def get_blog(self, blog_id: str | int) -> dict[str, Any] | None:
        """Return one blog by id, or ``None`` when it does not exist."""
        try:
            response = await self._request(
                "GET",
                f"{BLOGS_PATH}/{blog_id}",
                params={"populate": "*"},
                on_404=SourceNotAvailableError,
            )
        except SourceNotAvailableError:
            return None
        return (response or {}).get("data") or None

    async def find_blog_by_slug(self, slug: str) -> dict[str, Any] | None:
        """Return the first blog with ``slug``, or ``None``."""
        response = await self._request(
            "GET",
            BLOGS_PATH,
            params={"filters[slug][$eq]": slug, "populate": "*"},
        )
        data = (response or {}).get("data") or []
        return data[0] if data else None


async def import_entries(
    client: StrapiClient, entries: Iterable[BlogEntry]
) -> ImportReport:
    """Create entries one by one, continuing past failures.

    Args:
        client: An open ``StrapiClient``.
        entries: Entries to import, in order.

    Returns:
        Success and error counts plus the error message of each failure.
    """
    report = ImportReport()
    for entry in entries:
        try:
            await client.create_blog(entry)
        except ImportFailedError as exc:
            logger.error("Failed: %s (%s)", entry.name, exc.__cause__ or exc)
            report.error_count += 1
            report.failures.append(
                ImportFailure(name=entry.name, slug=entry.slug, message=str(exc.__cause__ or exc))
            )
            continue
        logger.info("Imported: %s", entry.name)
        report.success_count += 1
    return report


def blog_attributes(blog: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the attribute mapping of a Strapi record (v4 nested or v5 flat)."""
    attributes = blog.get("attributes")
    return attributes if isinstance(attributes, Mapping) else blog


def format_blog_details(blog: Mapping[str, Any], *, preview_chars: int = 300) -> str:
    """Render one blog record as a details block with a body preview."""
    attrs = blog_attributes(blog)
    tags = attrs.get("tags")
    preview = (attrs.get("blogText") or "")[:preview_chars] or "No content"
    lines = [
        "Blog Details:",
        _RULE * 60,
        f"ID: {blog.get('id')}",
        f"Name: {attrs.get('name')}",
        f"Slug: {attrs.get('slug')}",
        f"Status: {attrs.get('status')}",
        f"Author: {attrs.get('author') or 'N/A'}",
        f"Published: {attrs.get('publishedDate') or 'N/A'}",
        f"Tags: {tags if tags else 'N/A'}",
        "",
        "Blog Text Preview:",
        _RULE * 60,
        preview + "...",
        _RULE * 60,
    ]
    return "\n".join(lines)


def format_blog_table(blogs: Iterable[Mapping[str, Any]]) -> str:
    """Render blog records as a fixed-width table."""
    lines = [
        _RULE * 100,
        "ID".ljust(6) + "Name".ljust(40) + "Slug".ljust(30) + "Status".ljust(12) + "Published",
        _RULE * 100,
    ]
    for blog in blogs:
        attrs = blog_attributes(blog)
        lines.append(
            str(blog.get("id", "")).ljust(6)
            + (attrs.get("name") or "")[:37].ljust(40)
            + (attrs.get("slug") or "")[:27].ljust(30)
            + (attrs.get("status") or "").ljust(12)
            + _format_date(attrs.get("publishedDate"))
        )
    lines.append(_RULE * 100)
    return "\n".join(lines)


def _format_date(value: Any) -> str:
    if not value:
        return "N/A"
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return str(value)
