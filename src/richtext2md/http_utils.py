"""HTTP utilities for JSON APIs with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
from typing import Any, Final

import httpx

from richtext2md.config import (
    RICHTEXT2MD_FETCH_BACKOFF_S,
    RICHTEXT2MD_FETCH_MAX_RETRIES,
    RICHTEXT2MD_FETCH_TIMEOUT_S,
    RICHTEXT2MD_USER_AGENT,
)
from richtext2md.exceptions import FetchError, RateLimitError

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def create_client(
    *, base_url: str = "", headers: dict[str, str] | None = None
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the package defaults.

    Args:
        base_url: Optional base URL for relative request paths.
        headers: Extra headers merged over the default ``User-Agent``.
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(RICHTEXT2MD_FETCH_TIMEOUT_S),
        headers={"User-Agent": RICHTEXT2MD_USER_AGENT, **(headers or {})},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def request_json_with_retries(
    method: str,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    params: dict[str, Any] | None = None,
    json_body: Any = None,
    headers: dict[str, str] | None = None,
    max_retries: int | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> Any:
    """Send a request and decode the JSON response, retrying transient failures.

    Status codes in ``RETRY_STATUS_CODES`` and transport errors are retried
    with exponential backoff. Other error statuses fail immediately.

    Args:
        method: HTTP method, e.g. ``"GET"`` or ``"POST"``.
        url: Absolute URL, or a path relative to the client's base URL.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        params: Query string parameters.
        json_body: Value sent as the JSON request body.
        headers: Per-request headers.
        max_retries: Retry budget; defaults to the configured value.
        on_404: Custom exception class to raise on 404. Defaults to FetchError.
        on_404_message: Custom error message for 404 responses.

    Returns:
        The decoded JSON body, or ``None`` for an empty response.

    Raises:
        RateLimitError: If still rate limited after all retries.
        FetchError (or custom on_404 exception): If the request fails after
            all retries, returns 404, returns a non-retryable error status
            or answers with a body that is not JSON.
    """
    retries = RICHTEXT2MD_FETCH_MAX_RETRIES if max_retries is None else max_retries
    not_found_exc_class = on_404 or FetchError

    async def do_request(http_client: httpx.AsyncClient) -> Any:
        last_exc: Exception | None = None

        for attempt in range(retries + 1):
            try:
                response = await http_client.request(
                    method, url, params=params, json=json_body, headers=headers
                )
            except httpx.RequestError as exc:
                last_exc = exc
            else:
                if response.status_code == 404:
                    message = on_404_message or f"Resource not found at {url}"
                    raise not_found_exc_class(message)

                if response.status_code == 429:
                    last_exc = RateLimitError(f"HTTP 429 from {url}")
                elif response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                elif response.is_error:
                    raise FetchError(
                        f"HTTP {response.status_code} from {url}: "
                        f"{extract_error_message(response)}"
                    )
                else:
                    if not response.content:
                        return None
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise FetchError(f"Invalid JSON from {url}") from exc

            if attempt < retries:
                backoff = RICHTEXT2MD_FETCH_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        if isinstance(last_exc, RateLimitError):
            raise last_exc
        raise FetchError(f"Failed to {method} {url}: {last_exc}")

    if client is not None:
        return await do_request(client)

    async with create_client() as new_client:
        return await do_request(new_client)


def extract_error_message(response: httpx.Response) -> str:
    """Pull a human-readable error out of a JSON error body.

    Understands Strapi (``{"error": {"message": ...}}``) and Contentful
    (``{"message": ...}``) error shapes, falling back to the reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "request failed"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
    return response.reason_phrase or "request failed"
