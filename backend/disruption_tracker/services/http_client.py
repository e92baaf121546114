"""
Shared HTTP access for the source adapters.

One aiohttp session is opened per refresh run and handed to every adapter.
Each call carries its own timeout so a single slow upstream cannot stall a
whole family.
"""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from disruption_tracker.config import settings


class UpstreamError(Exception):
    """Non-2xx response, timeout or network failure from an upstream source"""

    def __init__(self, message: str, url: str = '', status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class HttpClient:
    """
    Thin async wrapper around aiohttp.ClientSession

    Usage:
        async with HttpClient() as http:
            data = await http.get_json(url)
    """

    def __init__(
        self,
        timeout: float = None,
        user_agent: str = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.user_agent = user_agent or settings.USER_AGENT
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={"User-Agent": self.user_agent})
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def get_bytes(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """
        GET a URL and return the raw body

        Raises:
            UpstreamError: on non-2xx status, timeout or connection failure
        """
        if self._session is None:
            raise RuntimeError("HttpClient used outside of 'async with'")

        request_headers = {"User-Agent": self.user_agent}
        if headers:
            request_headers.update(headers)

        try:
            async with self._session.get(
                url,
                headers=request_headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    logger.debug(f"HTTP {response.status} from {url}")
                    raise UpstreamError(f"HTTP {response.status}", url=url, status=response.status)
                return await response.read()
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Timed out after {self.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Network error: {e}", url=url) from e

    async def get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """GET a URL and decode the body as JSON"""
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        body = await self.get_bytes(url, headers=request_headers)
        try:
            return json.loads(body)
        except ValueError as e:
            raise UpstreamError(f"Malformed JSON: {e}", url=url) from e
