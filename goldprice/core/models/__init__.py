"""Data models for readings and published snapshots."""

from goldprice.core.models.prices import (
    DEFAULT_RATE_FLOOR,
    DomesticSource,
    LastKnownGood,
    PublishedSnapshot,
    Quantity,
    RawReading,
    SourceReading,
    positive_or_none,
)

__all__ = [
    "DEFAULT_RATE_FLOOR",
    "DomesticSource",
    "LastKnownGood",
    "PublishedSnapshot",
    "Quantity",
    "RawReading",
    "SourceReading",
    "positive_or_none",
]
