"""JSON ticker feeds used as fallbacks for the international price.

Both quote PAX Gold (PAXG), a token redeemable for one troy ounce of London
good delivery gold, which tracks spot XAU/USD closely.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

import httpx

from goldprice.core.data.sources.base import SourceFetcher, parse_price
from goldprice.core.exceptions import PayloadParseError
from goldprice.core.http_adapter import HttpConfig
from goldprice.core.models import Quantity, SourceReading


class JsonPriceFetcher(SourceFetcher):
    """Reads the international price at ``path`` inside a JSON object."""

    def __init__(
        self,
        name: str,
        url: str,
        path: Sequence[str],
        http_config: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(name, url, http_config=http_config, transport=transport)
        self.path = tuple(path)

    def parse(self, body: str) -> SourceReading:
        try:
            node: object = json.loads(body)
        except ValueError as exc:
            raise PayloadParseError(
                f"malformed JSON: {exc}", provider_name=self.name
            ) from exc

        for key in self.path:
            if not isinstance(node, dict) or key not in node:
                raise PayloadParseError(
                    f"missing key {'.'.join(self.path)}",
                    provider_name=self.name,
                    field=Quantity.INTERNATIONAL.value,
                )
            node = node[key]

        price = parse_price(node, self.name, Quantity.INTERNATIONAL.value)
        return SourceReading(source=self.name, international=price)


def binance_fetcher(url: str, **kwargs) -> JsonPriceFetcher:
    """``{"symbol": "PAXGUSDT", "price": "2034.51"}``"""
    return JsonPriceFetcher("binance", url, ("price",), **kwargs)


def coinbase_fetcher(url: str, **kwargs) -> JsonPriceFetcher:
    """``{"data": {"base": "PAXG", "currency": "USD", "amount": "2034.51"}}``"""
    return JsonPriceFetcher("coinbase", url, ("data", "amount"), **kwargs)


__all__ = ["JsonPriceFetcher", "binance_fetcher", "coinbase_fetcher"]
