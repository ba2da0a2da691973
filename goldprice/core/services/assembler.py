"""Merges the per-source readings of one poll cycle into a RawReading."""

from __future__ import annotations

from collections.abc import Sequence

import httpx

from goldprice.core.config import SourceConfig
from goldprice.core.data.sources import SourceFetcher, build_sources
from goldprice.core.logging import logger
from goldprice.core.models import RawReading, SourceReading


class SnapshotAssembler:
    """Queries the primary source, then the fallbacks one at a time.

    Fallbacks are consulted only for the international price, strictly in
    order, and only while no positive international price has been found.
    """

    def __init__(self, primary: SourceFetcher, fallbacks: Sequence[SourceFetcher] = ()) -> None:
        self._primary = primary
        self._fallbacks = tuple(fallbacks)

    @classmethod
    def from_config(
        cls,
        config: SourceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SnapshotAssembler:
        primary, fallbacks = build_sources(config, transport=transport)
        return cls(primary, fallbacks)

    @property
    def sources(self) -> tuple[SourceFetcher, ...]:
        return (self._primary, *self._fallbacks)

    async def assemble(self) -> RawReading:
        raw = RawReading().merge(await self._primary.fetch())
        if raw.international is not None:
            return raw

        for fallback in self._fallbacks:
            reading = await fallback.fetch()
            if reading.international is not None:
                logger.info(
                    "International price taken from fallback",
                    source=fallback.name,
                    international=reading.international,
                )
                return raw.merge(SourceReading(source=fallback.name, international=reading.international))
        return raw

    async def close(self) -> None:
        for source in self.sources:
            await source.close()


__all__ = ["SnapshotAssembler"]
