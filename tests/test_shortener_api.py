"""Tests for the HTTP gateway (httpx.MockTransport, no network)."""

import json

import httpx
import pytest

from adapters.shortener_api import ShortenerApiClient
from core.errors import ApiError, NetworkError, NotFoundError

from conftest import SHORTEN_PAYLOAD, STATS_PAYLOAD


def make_client(settings, handler):
    return ShortenerApiClient(settings, transport=httpx.MockTransport(handler))


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.mark.asyncio
class TestShorten:
    async def test_posts_url_as_json_string(self, settings):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(201, json=SHORTEN_PAYLOAD)

        result = await make_client(settings, handler).shorten("http://example.com/very/long/path")

        assert seen["method"] == "POST"
        assert seen["url"] == "http://shortener.test/api/shorten"
        assert seen["body"] == "http://example.com/very/long/path"
        assert seen["content_type"] == "application/json"
        assert result.short_code == "abc123"
        assert result.url == "http://example.com/very/long/path"
        assert result.expires_at == "2024-02-01T00:00:00Z"

    async def test_server_message_is_passed_through(self, settings):
        client = make_client(settings, lambda r: httpx.Response(400, json={"message": "URL is blocked"}))

        with pytest.raises(ApiError) as excinfo:
            await client.shorten("http://example.com")

        assert excinfo.value.message == "URL is blocked"
        assert excinfo.value.status_code == 400

    async def test_generic_message_without_body(self, settings):
        client = make_client(settings, lambda r: httpx.Response(500, text="<html>oops</html>"))

        with pytest.raises(ApiError) as excinfo:
            await client.shorten("http://example.com")

        assert excinfo.value.message == "Failed to shorten URL"

    async def test_no_response_is_network_error(self, settings):
        with pytest.raises(NetworkError):
            await make_client(settings, refuse).shorten("http://example.com")

    async def test_malformed_success_body_is_api_error(self, settings):
        client = make_client(settings, lambda r: httpx.Response(200, json={"unexpected": True}))

        with pytest.raises(ApiError):
            await client.shorten("http://example.com")


@pytest.mark.asyncio
class TestFetchStats:
    async def test_success(self, settings):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            return httpx.Response(200, json=STATS_PAYLOAD)

        result = await make_client(settings, handler).fetch_stats("ABC")

        assert seen["path"] == "/api/shorten/ABC/stats"
        assert result.access_count == 5
        assert result.short_code == "ABC"

    async def test_short_code_is_percent_encoded(self, settings):
        seen = {}

        def handler(request):
            seen["raw_path"] = request.url.raw_path
            return httpx.Response(200, json=STATS_PAYLOAD)

        await make_client(settings, handler).fetch_stats("abc 1")

        assert seen["raw_path"] == b"/api/shorten/abc%201/stats"

    async def test_404_is_not_found(self, settings):
        client = make_client(settings, lambda r: httpx.Response(404))

        with pytest.raises(NotFoundError):
            await client.fetch_stats("XYZ")

    async def test_other_status_is_plain_api_error(self, settings):
        client = make_client(settings, lambda r: httpx.Response(503))

        with pytest.raises(ApiError) as excinfo:
            await client.fetch_stats("XYZ")

        assert not isinstance(excinfo.value, NotFoundError)
        assert excinfo.value.message == "Failed to retrieve statistics"

    async def test_no_response_is_network_error(self, settings):
        with pytest.raises(NetworkError):
            await make_client(settings, refuse).fetch_stats("XYZ")


@pytest.mark.asyncio
class TestHealth:
    async def test_2xx_is_healthy(self, settings):
        client = make_client(settings, lambda r: httpx.Response(200, text="OK"))
        assert await client.check_health() is True

    async def test_non_2xx_is_unhealthy(self, settings):
        client = make_client(settings, lambda r: httpx.Response(503, text="down"))
        assert await client.check_health() is False

    async def test_network_failure_is_unhealthy_not_raised(self, settings):
        assert await make_client(settings, refuse).check_health() is False


@pytest.mark.asyncio
class TestUpdateAndDelete:
    async def test_update_puts_new_url(self, settings):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={**SHORTEN_PAYLOAD, "url": "https://example.org/new"})

        result = await make_client(settings, handler).update("abc123", "https://example.org/new")

        assert seen == {"method": "PUT", "path": "/api/shorten/abc123", "body": "https://example.org/new"}
        assert result.url == "https://example.org/new"

    async def test_delete(self, settings):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            return httpx.Response(204)

        assert await make_client(settings, handler).delete("abc123") is None
        assert seen["method"] == "DELETE"

    @pytest.mark.parametrize("operation", ["update", "delete"])
    async def test_unknown_code_is_not_found(self, settings, operation):
        client = make_client(settings, lambda r: httpx.Response(404))

        with pytest.raises(NotFoundError):
            if operation == "update":
                await client.update("nope", "https://example.org")
            else:
                await client.delete("nope")
