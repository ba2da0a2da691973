"""Quote sources and their factory."""

from __future__ import annotations

import httpx

from goldprice.core.config import SourceConfig
from goldprice.core.data.sources.base import SourceFetcher, parse_price
from goldprice.core.data.sources.json_feed import JsonPriceFetcher, binance_fetcher, coinbase_fetcher
from goldprice.core.data.sources.sina import RateLineLayout, SinaQuoteFetcher, parse_sina_payload
from goldprice.core.http_adapter import HttpConfig


def build_sources(
    config: SourceConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[SourceFetcher, list[SourceFetcher]]:
    """Primary fetcher and the international-price fallbacks in priority order."""

    config = config or SourceConfig()
    http_config = HttpConfig(
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        user_agent=config.user_agent,
    )
    primary = SinaQuoteFetcher(
        config.primary_url, config.primary_referer, http_config=http_config, transport=transport
    )
    fallbacks: list[SourceFetcher] = []
    if config.fallbacks_enabled:
        fallbacks = [
            binance_fetcher(config.binance_url, http_config=http_config, transport=transport),
            coinbase_fetcher(config.coinbase_url, http_config=http_config, transport=transport),
        ]
    return primary, fallbacks


__all__ = [
    "JsonPriceFetcher",
    "RateLineLayout",
    "SinaQuoteFetcher",
    "SourceFetcher",
    "binance_fetcher",
    "build_sources",
    "coinbase_fetcher",
    "parse_price",
    "parse_sina_payload",
]
