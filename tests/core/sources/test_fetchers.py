"""Fetchers against an in-process httpx transport."""

from __future__ import annotations

import httpx
import pytest

from goldprice.core.config import SourceConfig
from goldprice.core.data.sources import (
    SinaQuoteFetcher,
    binance_fetcher,
    build_sources,
    coinbase_fetcher,
    parse_price,
)
from goldprice.core.exceptions import PayloadParseError

SINA_BODY = (
    'var hq_str_hf_XAU="2034.50,2031.10";\n'
    'var hq_str_gds_AUTD="478.20,0";\n'
    'var hq_str_USDCNY="15:29:58,7.1795,7.1790,7.1801";\n'
)


def _transport(status: int = 200, body: str = "", *, error: Exception | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if error is not None:
            raise error
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_sina_fetcher_sends_referer_and_parses_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=SINA_BODY)

    fetcher = SinaQuoteFetcher(
        "http://hq.sinajs.cn/list=hf_XAU,gds_AUTD,USDCNY",
        "https://finance.sina.com.cn/",
        transport=httpx.MockTransport(handler),
    )
    try:
        reading = await fetcher.fetch()
    finally:
        await fetcher.close()

    assert reading.international == 2034.50
    assert reading.domestic == 478.20
    assert reading.rate == 7.1801
    assert seen[0].headers["Referer"] == "https://finance.sina.com.cn/"
    assert "Mozilla" in seen[0].headers["User-Agent"]


@pytest.mark.asyncio
async def test_timeout_becomes_failed_reading() -> None:
    fetcher = binance_fetcher(
        "https://api.binance.com/api/v3/ticker/price?symbol=PAXGUSDT",
        transport=_transport(error=httpx.ConnectTimeout("timed out")),
    )

    reading = await fetcher.fetch()

    assert reading.source == "binance"
    assert not reading.ok
    assert "ConnectTimeout" in (reading.error or "")
    assert reading.international is None


@pytest.mark.asyncio
async def test_server_error_becomes_failed_reading() -> None:
    fetcher = coinbase_fetcher("https://api.coinbase.com/v2/prices/PAXG-USD/spot", transport=_transport(500, "oops"))

    reading = await fetcher.fetch()

    assert not reading.ok
    assert "HTTPStatusError" in (reading.error or "")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["not json", '{"symbol": "PAXGUSDT"}', '{"price": "abc"}', '["2034.5"]'])
async def test_malformed_json_becomes_failed_reading(body: str) -> None:
    fetcher = binance_fetcher("https://example.test/price", transport=_transport(200, body))

    reading = await fetcher.fetch()

    assert not reading.ok
    assert reading.international is None


@pytest.mark.asyncio
async def test_binance_and_coinbase_paths() -> None:
    binance = binance_fetcher("https://example.test/b", transport=_transport(200, '{"symbol": "PAXGUSDT", "price": "2034.51"}'))
    coinbase = coinbase_fetcher(
        "https://example.test/c",
        transport=_transport(200, '{"data": {"base": "PAXG", "currency": "USD", "amount": "2033.90"}}'),
    )

    assert (await binance.fetch()).international == 2034.51
    assert (await coinbase.fetch()).international == 2033.90


@pytest.mark.asyncio
async def test_sina_body_without_symbols_becomes_failed_reading() -> None:
    fetcher = SinaQuoteFetcher("http://example.test", "https://finance.sina.com.cn/", transport=_transport(200, ""))

    reading = await fetcher.fetch()

    assert not reading.ok


def test_parse_price_accepts_strings_and_numbers() -> None:
    assert parse_price(" 7.18 ", "sina", "rate") == 7.18
    assert parse_price(2034, "binance", "international") == 2034.0


@pytest.mark.parametrize("value", [None, True, "nan", "inf", "", {"a": 1}])
def test_parse_price_rejects_non_numbers(value: object) -> None:
    with pytest.raises(PayloadParseError):
        parse_price(value, "binance", "international")


def test_build_sources_orders_fallbacks() -> None:
    primary, fallbacks = build_sources(SourceConfig())

    assert primary.name == "sina"
    assert [source.name for source in fallbacks] == ["binance", "coinbase"]
    assert primary.http_client.http_config.headers["Referer"] == "https://finance.sina.com.cn/"


def test_build_sources_without_fallbacks() -> None:
    _, fallbacks = build_sources(SourceConfig(fallbacks_enabled=False, read_timeout=3.0))

    assert fallbacks == []
