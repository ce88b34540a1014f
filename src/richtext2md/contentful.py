"""Fetch entries from the Contentful Content Delivery API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from richtext2md.config import (
    CONTENTFUL_ACCESS_TOKEN,
    CONTENTFUL_CDN_URL,
    CONTENTFUL_CONTENT_TYPE,
    CONTENTFUL_ENVIRONMENT,
    CONTENTFUL_PAGE_LIMIT,
    CONTENTFUL_SPACE_ID,
)
from richtext2md.exceptions import ConfigurationError, FetchError, SourceNotAvailableError
from richtext2md.http_utils import create_client, request_json_with_retries

logger = logging.getLogger(__name__)

_404_MESSAGE = (
    "Contentful space or environment not found. "
    "Check CONTENTFUL_SPACE_ID and CONTENTFUL_ENVIRONMENT."
)


async def fetch_contentful_entries(
    *,
    space_id: str | None = None,
    access_token: str | None = None,
    content_type: str | None = None,
    environment: str | None = None,
    limit: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Fetch every entry of a content type, following pagination.

    Arguments left as ``None`` fall back to the ``CONTENTFUL_*`` settings.

    Args:
        space_id: Contentful space identifier.
        access_token: Content Delivery API token.
        content_type: Content type id of the entries to fetch.
        environment: Space environment, ``master`` by default.
        limit: Page size (Contentful caps this at 1000).
        client: Optional httpx.AsyncClient for connection pooling.

    Returns:
        A payload shaped like one Contentful response: ``items`` holds all
        entries and ``includes`` the linked assets and entries of all pages.

    Raises:
        ConfigurationError: If the space id or access token is missing.
        SourceNotAvailableError: If the space or environment does not exist.
        FetchError: If a request fails after retries.
    """
    space_id = space_id or CONTENTFUL_SPACE_ID
    access_token = access_token or CONTENTFUL_ACCESS_TOKEN
    if not space_id or not access_token:
        raise ConfigurationError(
            "Set CONTENTFUL_SPACE_ID and CONTENTFUL_ACCESS_TOKEN to fetch from Contentful."
        )

    url = (
        f"{CONTENTFUL_CDN_URL}/spaces/{space_id}"
        f"/environments/{environment or CONTENTFUL_ENVIRONMENT}/entries"
    )
    page_size = limit or CONTENTFUL_PAGE_LIMIT
    headers = {"Authorization": f"Bearer {access_token}"}

    async def fetch_pages(http_client: httpx.AsyncClient) -> dict[str, Any]:
        items: list[dict[str, Any]] = []
        includes: dict[str, list[dict[str, Any]]] = {}
        skip = 0
        while True:
            page = await request_json_with_retries(
                "GET",
                url,
                client=http_client,
                params={
                    "content_type": content_type or CONTENTFUL_CONTENT_TYPE,
                    "limit": page_size,
                    "skip": skip,
                },
                headers=headers,
                on_404=SourceNotAvailableError,
                on_404_message=_404_MESSAGE,
            )
            if not isinstance(page, Mapping):
                raise FetchError(f"Unexpected Contentful response from {url}: expected an object")
            page_items = page.get("items") or []
            items.extend(page_items)
            for link_type, linked in (page.get("includes") or {}).items():
                includes.setdefault(link_type, []).extend(linked)

            skip += len(page_items)
            total = page.get("total", skip)
            logger.debug("Fetched %d/%d Contentful entries", skip, total)
            if not page_items or skip >= total:
                break

        return {"total": len(items), "items": items, "includes": includes}

    if client is not None:
        return await fetch_pages(client)

    async with create_client() as new_client:
        return await fetch_pages(new_client)
