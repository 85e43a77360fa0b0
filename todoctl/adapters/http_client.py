"""
Adapter for HTTP client library (httpx).
Isolates httpx-specific imports to make library replacement easier.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from todoctl.exceptions import TransportError
from todoctl.models import ResponseOutcome

logger = logging.getLogger(__name__)

CONTENT_TYPE = b"content-type"


def first_raw_header(raw_headers, name: bytes) -> Optional[bytes]:
    """Return the first raw value for a header name, or None if absent."""
    for key, value in raw_headers:
        if key.lower() == name:
            return value
    return None


class AsyncHTTPClientAdapter(ABC):
    """Abstract adapter for async HTTP client operations."""

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        *,
        content: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
    ) -> ResponseOutcome:
        """Perform one round-trip and return the fully received response."""
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        pass


class HttpxAsyncClientAdapter(AsyncHTTPClientAdapter):
    """httpx async implementation of AsyncHTTPClientAdapter."""

    def __init__(self, timeout: Optional[float] = None, **kwargs):
        """Initialize httpx async client. A timeout of None waits indefinitely."""
        self._client = httpx.AsyncClient(timeout=timeout, **kwargs)

    async def request(
        self,
        method: str,
        url: str,
        *,
        content: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
    ) -> ResponseOutcome:
        """
        Send the request and accumulate the streamed body chunk by chunk.

        Raises:
            TransportError: On any connect, send or receive failure
        """
        logger.debug(f"Sending {method} {url} ({len(content)} bytes)")
        buffer = bytearray()
        try:
            async with self._client.stream(method, url, content=content, headers=headers) as response:
                async for chunk in response.aiter_bytes():
                    buffer.extend(chunk)
                status_code = response.status_code
                content_type = first_raw_header(response.headers.raw, CONTENT_TYPE)
        except httpx.HTTPError as e:
            raise TransportError(method, url, original_error=e) from e

        logger.debug(f"Received status {status_code} with {len(buffer)} body bytes")
        return ResponseOutcome(
            status_code=status_code,
            content_type=content_type,
            body=bytes(buffer),
        )

    async def aclose(self) -> None:
        """Close the async client."""
        await self._client.aclose()


class HTTPClientAdapterFactory:
    """Factory for creating HTTP client adapters."""

    @staticmethod
    def create_async_client(timeout: Optional[float] = None, **kwargs) -> AsyncHTTPClientAdapter:
        """Create async HTTP client adapter."""
        return HttpxAsyncClientAdapter(timeout=timeout, **kwargs)

