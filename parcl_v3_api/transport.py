"""HTTP transport for the Parcl v3 API client.

The client only needs one round trip primitive: send a request, get back the
status code and the raw body. Anything that implements `send` and `close`
can stand in for `AiohttpTransport`.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol, Sequence

import aiohttp

from .error import TransportError

logger = logging.getLogger(__name__)

Query = Sequence[tuple[str, Optional[str]]]


class Transport(Protocol):
    async def send(
        self,
        method: str,
        path: str,
        query: Query = (),
        body: Optional[Any] = None,
    ) -> tuple[int, bytes]:
        ...

    async def close(self) -> None:
        ...


class AiohttpTransport:
    """aiohttp-backed transport.

    The session is created lazily on first use. A session passed in by the
    caller is shared, not owned, and is left open by `close()`.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[dict[str, str]] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            self._headers.update(headers)
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "AiohttpTransport":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._headers)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def send(
        self,
        method: str,
        path: str,
        query: Query = (),
        body: Optional[Any] = None,
    ) -> tuple[int, bytes]:
        """Perform a single request.

        Args:
            method: HTTP method (GET or POST)
            path: Endpoint path, appended to the base URL
            query: Ordered query pairs; pairs with a None value are dropped
            body: JSON-serializable request body

        Returns:
            Tuple of (status code, raw body bytes)

        Raises:
            TransportError: If the request could not be completed
        """
        session = await self._ensure_session()
        url = f"{self._base_url}{path}"
        kwargs: dict[str, Any] = {}
        params = [(key, value) for key, value in query if value is not None]
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        logger.debug(f"{method} {url} params={params}")
        try:
            async with session.request(method, url, **kwargs) as response:
                raw = await response.read()
                return response.status, raw
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
