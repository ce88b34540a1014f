"""Tests for HTTP utilities module."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from richtext2md.exceptions import FetchError, RateLimitError
from richtext2md.http_utils import (
    RETRY_STATUS_CODES,
    create_client,
    extract_error_message,
    request_json_with_retries,
)


def _mock_client(*responses: httpx.Response | Exception) -> httpx.AsyncClient:
    """Client whose transport replays ``responses`` in order."""
    queue = list(responses)
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.calls = calls  # type: ignore[attr-defined]
    return client


class TestRetryStatusCodes:
    """Tests for RETRY_STATUS_CODES constant."""

    def test_contains_expected_codes(self) -> None:
        """Should contain all expected retryable status codes."""
        assert RETRY_STATUS_CODES == frozenset({429, 500, 502, 503, 504})


class TestRequestJsonWithRetries:
    """Tests for request_json_with_retries function."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self) -> None:
        async with _mock_client(httpx.Response(200, json={"items": [1]})) as client:
            result = await request_json_with_retries("GET", "https://example.com", client=client)

        assert result == {"items": [1]}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self) -> None:
        async with _mock_client(httpx.Response(204)) as client:
            result = await request_json_with_retries("DELETE", "https://example.com", client=client)

        assert result is None

    @pytest.mark.asyncio
    async def test_non_json_body_raises_fetch_error(self) -> None:
        async with _mock_client(httpx.Response(200, text="<html>proxy</html>")) as client:
            with pytest.raises(FetchError, match="Invalid JSON"):
                await request_json_with_retries("GET", "https://example.com", client=client)

    @pytest.mark.asyncio
    async def test_sends_params_body_and_headers(self) -> None:
        async with _mock_client(httpx.Response(200, json={})) as client:
            await request_json_with_retries(
                "POST",
                "https://example.com/api",
                client=client,
                params={"limit": 10},
                json_body={"data": {"name": "x"}},
                headers={"Authorization": "Bearer t"},
            )
            request = client.calls[0]  # type: ignore[attr-defined]

        assert request.method == "POST"
        assert request.url.params["limit"] == "10"
        assert request.headers["Authorization"] == "Bearer t"
        assert json.loads(request.content) == {"data": {"name": "x"}}

    @pytest.mark.asyncio
    async def test_raises_on_404_with_default_message(self) -> None:
        async with _mock_client(httpx.Response(404)) as client:
            with pytest.raises(FetchError, match="Resource not found"):
                await request_json_with_retries("GET", "https://example.com/missing", client=client)

    @pytest.mark.asyncio
    async def test_raises_custom_exception_on_404(self) -> None:
        """Raises custom exception class on 404 when specified."""

        class CustomError(Exception):
            pass

        async with _mock_client(httpx.Response(404)) as client:
            with pytest.raises(CustomError, match="Custom error"):
                await request_json_with_retries(
                    "GET",
                    "https://example.com",
                    client=client,
                    on_404=CustomError,
                    on_404_message="Custom error",
                )

    @pytest.mark.asyncio
    async def test_retries_on_503(self) -> None:
        """Retries on 503 status code."""
        with patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_BACKOFF_S", 0.0):
            async with _mock_client(
                httpx.Response(503), httpx.Response(200, json={"ok": True})
            ) as client:
                result = await request_json_with_retries(
                    "GET", "https://example.com", client=client, max_retries=2
                )
                assert len(client.calls) == 2  # type: ignore[attr-defined]

        assert result == {"ok": True}

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(self) -> None:
        """Raises FetchError after exhausting retries."""
        with (
            patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_MAX_RETRIES", 2),
            patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_BACKOFF_S", 0.0),
        ):
            async with _mock_client(*(httpx.Response(503) for _ in range(3))) as client:
                with pytest.raises(FetchError, match="Failed to GET"):
                    await request_json_with_retries("GET", "https://example.com", client=client)

                # Initial attempt + 2 retries = 3 total
                assert len(client.calls) == 3  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_raises_rate_limit_error_when_still_throttled(self) -> None:
        with patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_BACKOFF_S", 0.0):
            async with _mock_client(httpx.Response(429), httpx.Response(429)) as client:
                with pytest.raises(RateLimitError):
                    await request_json_with_retries(
                        "GET", "https://example.com", client=client, max_retries=1
                    )

    @pytest.mark.asyncio
    async def test_retries_on_request_error(self) -> None:
        """Retries on network request errors."""
        with patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_BACKOFF_S", 0.0):
            async with _mock_client(
                httpx.ConnectError("Connection failed"), httpx.Response(200, json=[1])
            ) as client:
                result = await request_json_with_retries(
                    "GET", "https://example.com", client=client, max_retries=1
                )

        assert result == [1]

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self) -> None:
        body = {"data": None, "error": {"status": 400, "message": "slug must be unique"}}
        async with _mock_client(httpx.Response(400, json=body)) as client:
            with pytest.raises(FetchError, match="slug must be unique"):
                await request_json_with_retries(
                    "POST", "https://example.com", client=client, max_retries=3
                )
            assert len(client.calls) == 1  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_backs_off_exponentially(self) -> None:
        with (
            patch("richtext2md.http_utils.RICHTEXT2MD_FETCH_BACKOFF_S", 0.5),
            patch("richtext2md.http_utils.asyncio.sleep", new_callable=AsyncMock) as mock_sleep,
        ):
            async with _mock_client(
                httpx.Response(500), httpx.Response(502), httpx.Response(200, json={})
            ) as client:
                await request_json_with_retries(
                    "GET", "https://example.com", client=client, max_retries=2
                )

        assert [call.args[0] for call in mock_sleep.await_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_creates_client_when_none_given(self) -> None:
        with patch("richtext2md.http_utils.create_client") as mock_create:
            mock_create.return_value = _mock_client(httpx.Response(200, json={"a": 1}))

            result = await request_json_with_retries("GET", "https://example.com")

        assert result == {"a": 1}
        mock_create.assert_called_once_with()


class TestCreateClient:
    """Tests for create_client."""

    @pytest.mark.asyncio
    async def test_merges_headers_over_user_agent(self) -> None:
        async with create_client(headers={"Authorization": "Bearer t"}) as client:
            assert client.headers["Authorization"] == "Bearer t"
            assert client.headers["User-Agent"].startswith("richtext2md/")
            assert client.follow_redirects is True


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_strapi_error_shape(self) -> None:
        response = httpx.Response(400, json={"error": {"message": "Invalid key tagz"}})
        assert extract_error_message(response) == "Invalid key tagz"

    def test_contentful_error_shape(self) -> None:
        response = httpx.Response(401, json={"message": "The access token you sent could not be found"})
        assert extract_error_message(response) == "The access token you sent could not be found"

    def test_non_json_body(self) -> None:
        response = httpx.Response(500, text="<html>oops</html>")
        assert extract_error_message(response) == "Internal Server Error"
