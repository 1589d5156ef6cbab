"""
Shared async HTTP client for the DeArrow APIs.

One pooled `httpx.AsyncClient` is shared by every message-processing task:
- Keep-alive connection pooling and optional HTTP/2
- Configurable connect/read timeouts
- Non-2xx responses raise `httpx.HTTPStatusError`

Requests are single-shot. A failed call is terminal for the message that
issued it, so there is no retry or circuit-breaker layer here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Any

import httpx
from httpx import AsyncClient, Response

from . import __version__
from .utils.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = f"DeArrow-Discord-Bot/{__version__} (+https://dearrow.ajay.app)"


@dataclass
class RequestConfig:
    """Timeout configuration for outgoing requests."""

    connect_timeout: float = 1.5  # seconds
    read_timeout: float = 5.0  # seconds
    write_timeout: float = 5.0  # seconds
    pool_timeout: float = 1.0  # seconds

    def to_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
            pool=self.pool_timeout,
        )


class SharedHttpClient:
    """Shared async HTTP client."""

    def __init__(
        self,
        request_config: Optional[RequestConfig] = None,
        *,
        http2: bool = True,
        max_connections: int = 32,
        max_keepalive: int = 16,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.request_config = request_config or RequestConfig()
        self.http2_enabled = http2
        self.max_connections = max_connections
        self.max_keepalive = max_keepalive
        self._transport = transport
        self.client: Optional[AsyncClient] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def start(self) -> None:
        """Start the HTTP client."""
        if self.client is not None:
            return  # Already started

        limits = httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive,
            keepalive_expiry=30.0,
        )

        self.client = AsyncClient(
            limits=limits,
            timeout=self.request_config.to_timeout(),
            headers={"User-Agent": USER_AGENT},
            http2=self.http2_enabled,
            follow_redirects=True,
            max_redirects=5,
            transport=self._transport,
        )

        logger.info(
            f"🌐 SharedHttpClient started (HTTP/2: {self.http2_enabled})",
            extra={"subsys": "http", "event": "http.start"},
        )

    async def stop(self) -> None:
        """Stop the HTTP client and release pooled connections."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("🛑 SharedHttpClient stopped", extra={"subsys": "http", "event": "http.stop"})

    async def get(self, url: str, **kwargs: Any) -> Response:
        """GET `url`; raises `httpx.HTTPError` on transport failure or non-2xx status."""
        if self.client is None:
            await self.start()

        response = await self.client.get(url, **kwargs)
        logger.debug(
            f"HTTP GET {response.request.url} -> {response.status_code}",
            extra={
                "subsys": "http",
                "event": "http.response",
                "detail": {"url": str(response.request.url), "status": response.status_code},
            },
        )
        response.raise_for_status()
        return response
