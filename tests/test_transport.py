"""Tests for the aiohttp transport."""

import asyncio

import aiohttp
import pytest

from parcl_v3_api import AiohttpTransport, TransportError


class MockResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class MockSession:
    """Stands in for aiohttp.ClientSession."""

    def __init__(self, response=None, error=None):
        self.response = response or MockResponse(200, b"{}")
        self.error = error
        self.requests = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


class TestAiohttpTransport:
    @pytest.mark.asyncio
    async def test_get_with_query(self):
        session = MockSession(MockResponse(200, b"[1]"))
        transport = AiohttpTransport("https://api.example.com/", session=session)

        status, body = await transport.send(
            "GET", "/market-ids", [("response_kind", "ids"), ("owner", None)]
        )

        assert (status, body) == (200, b"[1]")
        method, url, kwargs = session.requests[0]
        assert method == "GET"
        assert url == "https://api.example.com/market-ids"
        assert kwargs == {"params": [("response_kind", "ids")]}

    @pytest.mark.asyncio
    async def test_post_with_body(self):
        session = MockSession()
        transport = AiohttpTransport("https://api.example.com", session=session)

        await transport.send("POST", "/markets", body={"market_ids": ["1"]})

        _, _, kwargs = session.requests[0]
        assert kwargs == {"json": {"market_ids": ["1"]}}

    @pytest.mark.asyncio
    async def test_error_status_is_returned(self):
        session = MockSession(MockResponse(500, b"boom"))
        transport = AiohttpTransport("https://api.example.com", session=session)

        assert await transport.send("GET", "/exchange") == (500, b"boom")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        session = MockSession(error=aiohttp.ClientConnectionError("refused"))
        transport = AiohttpTransport("https://api.example.com", session=session)

        with pytest.raises(TransportError, match="GET /exchange failed"):
            await transport.send("GET", "/exchange")

    @pytest.mark.asyncio
    async def test_timeout(self):
        session = MockSession(error=asyncio.TimeoutError())
        transport = AiohttpTransport("https://api.example.com", session=session)

        with pytest.raises(TransportError):
            await transport.send("GET", "/exchange")

    @pytest.mark.asyncio
    async def test_shared_session_left_open(self):
        session = MockSession()
        transport = AiohttpTransport("https://api.example.com", session=session)

        await transport.close()

        assert not session.closed

    def test_base_url_trailing_slash(self):
        assert AiohttpTransport("https://api.example.com/").base_url == "https://api.example.com"
