"""Base class for quote sources."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import httpx

from goldprice.core.exceptions import PayloadParseError
from goldprice.core.http_adapter import HttpClient, HttpConfig
from goldprice.core.logging import logger
from goldprice.core.models import SourceReading


def parse_price(value: object, provider: str, field: str) -> float:
    """Convert a quoted string or JSON number to ``float``.

    Raises:
        PayloadParseError: when ``value`` is not a finite number.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PayloadParseError(
            f"{field} is not numeric: {value!r}", provider_name=provider, field=field
        )
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except ValueError as exc:
        raise PayloadParseError(
            f"{field} is not numeric: {value!r}", provider_name=provider, field=field
        ) from exc
    if not math.isfinite(number):
        raise PayloadParseError(
            f"{field} is not finite: {value!r}", provider_name=provider, field=field
        )
    return number


class SourceFetcher(ABC):
    """One upstream quote source.

    :meth:`fetch` never raises: transport failures, non-2xx statuses and
    unparseable bodies come back as a :class:`SourceReading` with ``error`` set.
    """

    def __init__(
        self,
        name: str,
        url: str,
        http_config: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self.url = url
        self.http_client = HttpClient(http_config, transport=transport)

    async def fetch(self) -> SourceReading:
        try:
            response = await self.http_client.get(self.url)
        except httpx.HTTPError as exc:
            logger.warning(
                "Quote request failed",
                source=self.name,
                error_code="TRANSPORT_ERROR",
                error=f"{type(exc).__name__}: {exc}",
            )
            return SourceReading.failed(self.name, f"{type(exc).__name__}: {exc}")

        try:
            return self.parse(response.text)
        except PayloadParseError as exc:
            logger.warning(
                "Quote payload rejected",
                source=self.name,
                error_code=exc.error_code,
                error=exc.message,
            )
            return SourceReading.failed(self.name, exc.message)

    @abstractmethod
    def parse(self, body: str) -> SourceReading:
        """Turn a response body into a reading; raise ``PayloadParseError`` if unusable."""

    async def close(self) -> None:
        await self.http_client.close()


__all__ = ["SourceFetcher", "parse_price"]
