from __future__ import annotations

import pytest

from goldprice.core.data.sources import SourceFetcher
from goldprice.core.models import SourceReading
from goldprice.core.services.assembler import SnapshotAssembler


class StubFetcher(SourceFetcher):
    def __init__(self, name: str, reading: SourceReading) -> None:
        super().__init__(name, f"https://{name}.test/")
        self.reading = reading
        self.calls = 0
        self.closed = False

    async def fetch(self) -> SourceReading:
        self.calls += 1
        return self.reading

    def parse(self, body: str) -> SourceReading:  # pragma: no cover - fetch is stubbed
        raise NotImplementedError

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_primary_with_international_skips_fallbacks() -> None:
    primary = StubFetcher("sina", SourceReading("sina", international=2000.0, domestic=452.0, rate=7.0))
    fallback = StubFetcher("binance", SourceReading("binance", international=1999.0))

    raw = await SnapshotAssembler(primary, [fallback]).assemble()

    assert raw.international == 2000.0
    assert raw.domestic == 452.0
    assert raw.sources == ("sina",)
    assert fallback.calls == 0


@pytest.mark.asyncio
async def test_fallbacks_queried_in_order_until_international_found() -> None:
    primary = StubFetcher("sina", SourceReading("sina", domestic=452.0, rate=7.0))
    binance = StubFetcher("binance", SourceReading.failed("binance", "ReadTimeout"))
    coinbase = StubFetcher("coinbase", SourceReading("coinbase", international=2001.0))
    spare = StubFetcher("spare", SourceReading("spare", international=1.0))

    raw = await SnapshotAssembler(primary, [binance, coinbase, spare]).assemble()

    assert raw.international == 2001.0
    assert raw.domestic == 452.0
    assert raw.rate == 7.0
    assert raw.sources == ("sina", "coinbase")
    assert (binance.calls, coinbase.calls, spare.calls) == (1, 1, 0)


@pytest.mark.asyncio
async def test_fallback_contributes_international_only() -> None:
    primary = StubFetcher("sina", SourceReading.failed("sina", "ConnectError"))
    fallback = StubFetcher("binance", SourceReading("binance", international=2000.0, rate=6.0))

    raw = await SnapshotAssembler(primary, [fallback]).assemble()

    assert raw.international == 2000.0
    assert raw.rate is None


@pytest.mark.asyncio
async def test_all_sources_failing_yields_empty_reading() -> None:
    primary = StubFetcher("sina", SourceReading.failed("sina", "ConnectError"))
    fallback = StubFetcher("binance", SourceReading.failed("binance", "ConnectError"))

    raw = await SnapshotAssembler(primary, [fallback]).assemble()

    assert (raw.international, raw.domestic, raw.rate) == (None, None, None)
    assert raw.sources == ()


@pytest.mark.asyncio
async def test_close_closes_every_source() -> None:
    primary = StubFetcher("sina", SourceReading("sina"))
    fallback = StubFetcher("binance", SourceReading("binance"))
    assembler = SnapshotAssembler(primary, [fallback])

    await assembler.close()

    assert primary.closed and fallback.closed
    assert [source.name for source in assembler.sources] == ["sina", "binance"]
