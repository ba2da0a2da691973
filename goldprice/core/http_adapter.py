"""
HTTP client used by the quote sources.

Wraps a lazily created ``httpx.AsyncClient`` with the headers and bounded
timeouts every upstream call needs. Requests are not retried: a failed quote is
simply tried again on the next poll cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    connect_timeout: float = 10.0
    read_timeout: float = 10.0
    user_agent: str = BROWSER_USER_AGENT
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.read_timeout <= 0:
            raise ValueError("read_timeout must be positive")

    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.read_timeout,
            connect=self.connect_timeout,
            read=self.read_timeout,
        )


class HttpClient:
    """
    Async HTTP client with fixed headers and timeouts.

    The underlying ``httpx.AsyncClient`` is created on first use and kept open
    across poll cycles until :meth:`close` is called.
    """

    def __init__(
        self,
        http_config: Optional[HttpConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http_config = http_config or HttpConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "User-Agent": self.http_config.user_agent,
                **self.http_config.headers,
            }
            self._client = httpx.AsyncClient(
                timeout=self.http_config.timeout(),
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute GET request; non-2xx responses raise ``httpx.HTTPStatusError``."""
        client = self._ensure_client()
        response = await client.get(url, **kwargs)
        response.raise_for_status()
        return response

