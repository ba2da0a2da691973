"""Live quote feeds; run with ``--goldprice-run-integration``."""

from __future__ import annotations

import pytest

from goldprice.core.client import GoldPriceClient
from goldprice.core.config import SourceConfig
from goldprice.core.data.sources import build_sources

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_primary_feed_returns_prices() -> None:
    primary, _ = build_sources(SourceConfig())
    try:
        reading = await primary.fetch()
    finally:
        await primary.close()

    assert reading.ok, reading.error
    assert reading.rate is not None and 5.0 < reading.rate < 10.0


@pytest.mark.asyncio
async def test_client_snapshot_has_prices() -> None:
    async with GoldPriceClient() as client:
        snapshot = await client.snapshot()

    assert snapshot.has_prices
    assert snapshot.rate > 0
