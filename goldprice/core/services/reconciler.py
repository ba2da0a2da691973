"""Decides the published domestic gold price for one poll cycle.

The exchange keeps returning its closing price while it is shut, so during
closed hours the domestic price is always replaced with the cross-rate value
``international / 31.1034768 * rate``. During trading hours the exchange quote
is trusted unless it is missing or deviates more than 5% from the cross-rate
value, which is treated as a bad print from the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from goldprice.core.logging import logger
from goldprice.core.models import (
    DEFAULT_RATE_FLOOR,
    DomesticSource,
    LastKnownGood,
    PublishedSnapshot,
    RawReading,
)
from goldprice.core.services.last_known_good import LastKnownGoodCache
from goldprice.core.services.market_clock import MarketClock
from goldprice.core.services.pricing import cross_rate_price, round_half_up

DEVIATION_THRESHOLD = 0.05


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconciliation: what to publish and what to cache next."""

    snapshot: PublishedSnapshot
    last_known_good: LastKnownGood
    calculated_domestic: float
    deviation: float | None = None


def resolve_rate(raw: RawReading, last_good: LastKnownGood) -> float:
    rate = raw.rate if raw.rate is not None else last_good.rate
    if rate <= 0:
        rate = DEFAULT_RATE_FLOOR
    return rate


def reconcile(
    raw: RawReading,
    market_closed: bool,
    last_good: LastKnownGood,
    *,
    published_at: datetime | None = None,
) -> ReconcileResult:
    """Compute the snapshot for ``raw`` without touching any shared state."""

    rate = resolve_rate(raw, last_good)
    international = raw.international if raw.international is not None else last_good.international

    calculated = 0.0
    if international > 0:
        calculated = cross_rate_price(international, rate)

    raw_domestic = raw.domestic if raw.domestic is not None else 0.0
    deviation: float | None = None
    if market_closed:
        override = calculated > 0
    elif raw_domestic <= 0:
        override = True
    elif calculated > 0:
        deviation = abs(raw_domestic - calculated) / calculated
        override = deviation > DEVIATION_THRESHOLD
    else:
        override = False

    if override and calculated > 0:
        domestic = calculated
        domestic_source = DomesticSource.CALCULATED
        logger.debug(
            "Domestic price replaced by cross-rate value",
            market_closed=market_closed,
            raw_domestic=raw_domestic,
            calculated=calculated,
            deviation=deviation,
        )
    elif raw_domestic <= 0:
        domestic = last_good.domestic
        domestic_source = DomesticSource.CACHED if domestic > 0 else DomesticSource.NONE
    else:
        domestic = raw_domestic
        domestic_source = DomesticSource.EXCHANGE

    snapshot = PublishedSnapshot(
        international=international if international > 0 else last_good.international,
        domestic=round_half_up(domestic) if domestic > 0 else 0.0,
        rate=rate,
        market_closed=market_closed,
        domestic_source=domestic_source,
        published_at=published_at,
        sources=raw.sources,
    )
    return ReconcileResult(
        snapshot=snapshot,
        last_known_good=last_good.updated_with(snapshot),
        calculated_domestic=calculated,
        deviation=deviation,
    )


class PriceReconciler:
    """Stateful front of :func:`reconcile` owning the last-known-good cache."""

    def __init__(
        self,
        market_clock: MarketClock | None = None,
        cache: LastKnownGoodCache | None = None,
    ) -> None:
        self._market_clock = market_clock or MarketClock()
        self._cache = cache or LastKnownGoodCache()

    @property
    def market_clock(self) -> MarketClock:
        return self._market_clock

    @property
    def last_known_good(self) -> LastKnownGood:
        return self._cache.value

    def reconcile(self, raw: RawReading, now: datetime | None = None) -> PublishedSnapshot:
        moment = now or self._market_clock.now()
        market_closed = self._market_clock.is_closed(moment)
        result = reconcile(raw, market_closed, self._cache.value, published_at=moment)
        self._cache.store(result.last_known_good)
        return result.snapshot


__all__ = [
    "DEVIATION_THRESHOLD",
    "PriceReconciler",
    "ReconcileResult",
    "reconcile",
    "resolve_rate",
]
