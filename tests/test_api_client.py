"""Tests for RemoteSource over an in-process httpx transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from pagefeed.core.config import Settings
from pagefeed.engines.pagination.api_client import RemoteSource
from pagefeed.engines.pagination.models import Failure, Success, Unknown

SETTINGS = Settings(base_url="https://api.test/api", items_path="character")


def _source(handler) -> RemoteSource:
    return RemoteSource(SETTINGS, transport=httpx.MockTransport(handler))


class TestFetchPage:
    @pytest.mark.anyio
    async def test_requests_page_and_validates(self, body):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=body([21, 22], page=2))

        async with _source(handler) as source:
            result = await source.fetch_page(2)

        assert isinstance(result, Success)
        assert [c.id for c in result.value.results] == [21, 22]
        assert result.value.info.next == "https://api.test/api/character?page=3"
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/character"
        assert seen[0].url.params["page"] == "2"

    @pytest.mark.anyio
    async def test_http_error_becomes_unknown(self):
        async with _source(lambda request: httpx.Response(404)) as source:
            result = await source.fetch_page(99)

        assert result == Failure(Unknown("HTTP 404 Not Found"))

    @pytest.mark.anyio
    async def test_server_error_is_not_retried(self):
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503)

        async with _source(handler) as source:
            result = await source.fetch_page(1)

        assert result == Failure(Unknown("HTTP 503 Service Unavailable"))
        assert len(calls) == 1

    @pytest.mark.anyio
    async def test_missing_fields_become_unknown(self):
        async with _source(lambda request: httpx.Response(200, json={"results": []})) as source:
            result = await source.fetch_page(1)

        assert isinstance(result, Failure)
        assert isinstance(result.reason, Unknown)
        assert result.reason.message.startswith("malformed response")

    @pytest.mark.anyio
    async def test_non_json_body_becomes_unknown(self):
        async with _source(lambda request: httpx.Response(200, content=b"<html>")) as source:
            result = await source.fetch_page(1)

        assert isinstance(result, Failure)
        assert isinstance(result.reason, Unknown)
        assert result.reason.message

    @pytest.mark.anyio
    async def test_timeout_becomes_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        async with _source(handler) as source:
            result = await source.fetch_page(1)

        assert result == Failure(Unknown("read timed out"))

    @pytest.mark.anyio
    async def test_connect_error_becomes_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _source(handler) as source:
            result = await source.fetch_page(1)

        assert result == Failure(Unknown("connection refused"))

    @pytest.mark.anyio
    async def test_rejects_page_zero(self):
        async with _source(lambda request: httpx.Response(200)) as source:
            with pytest.raises(ValueError):
                await source.fetch_page(0)

    @pytest.mark.anyio
    async def test_body_logged_when_enabled(self, body):
        settings = Settings(base_url="https://api.test/api", http_log_body=True)
        handler = httpx.MockTransport(lambda request: httpx.Response(200, json=body([1])))

        async with RemoteSource(settings, transport=handler) as source:
            result = await source.fetch_page(1)

        assert isinstance(result, Success)


class TestSafeCall:
    @pytest.mark.anyio
    async def test_success(self):
        async def block() -> int:
            return 42

        assert await RemoteSource.safe_call(block) == Success(42)

    @pytest.mark.anyio
    async def test_empty_message_gets_default(self):
        async def block() -> int:
            raise RuntimeError()

        assert await RemoteSource.safe_call(block) == Failure(Unknown("Unknown error"))

    @pytest.mark.anyio
    async def test_cancellation_propagates(self):
        async def block() -> int:
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await RemoteSource.safe_call(block)
