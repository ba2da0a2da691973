"""价格数据模型."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# 无汇率可用时的兜底汇率 (USD/CNY)
DEFAULT_RATE_FLOOR = 7.20


class Quantity(str, Enum):
    """The three quantities tracked per poll cycle."""

    INTERNATIONAL = "international"
    DOMESTIC = "domestic"
    RATE = "rate"


class DomesticSource(str, Enum):
    """Where a published domestic price came from."""

    EXCHANGE = "exchange"
    CALCULATED = "calculated"
    CACHED = "cached"
    NONE = "none"


def positive_or_none(value: float | None) -> float | None:
    """Return ``value`` when it is a strictly positive number, otherwise ``None``."""

    if value is None or value <= 0:
        return None
    return float(value)


@dataclass(frozen=True)
class SourceReading:
    """单个数据源在一个周期内的读数, 缺失字段为 ``None``."""

    source: str
    international: float | None = None
    domestic: float | None = None
    rate: float | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "international", positive_or_none(self.international))
        object.__setattr__(self, "domestic", positive_or_none(self.domestic))
        object.__setattr__(self, "rate", positive_or_none(self.rate))

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, source: str, error: str) -> SourceReading:
        return cls(source=source, error=error)


@dataclass(frozen=True)
class RawReading:
    """一次抓取周期合并后的原始读数."""

    international: float | None = None
    domestic: float | None = None
    rate: float | None = None
    sources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "international", positive_or_none(self.international))
        object.__setattr__(self, "domestic", positive_or_none(self.domestic))
        object.__setattr__(self, "rate", positive_or_none(self.rate))

    def merge(self, reading: SourceReading) -> RawReading:
        """Fill absent fields from ``reading``; present fields are kept."""

        merged = replace(
            self,
            international=self.international if self.international is not None else reading.international,
            domestic=self.domestic if self.domestic is not None else reading.domestic,
            rate=self.rate if self.rate is not None else reading.rate,
        )
        if merged != self:
            merged = replace(merged, sources=(*self.sources, reading.source))
        return merged


@dataclass(frozen=True)
class LastKnownGood:
    """各数值最近一次的有效值."""

    international: float = 0.0
    domestic: float = 0.0
    rate: float = DEFAULT_RATE_FLOOR

    def updated_with(self, snapshot: PublishedSnapshot) -> LastKnownGood:
        """Return a copy taking every strictly positive value from ``snapshot``."""

        return LastKnownGood(
            international=snapshot.international if snapshot.international > 0 else self.international,
            domestic=snapshot.domestic if snapshot.domestic > 0 else self.domestic,
            rate=snapshot.rate if snapshot.rate > 0 else self.rate,
        )


class PublishedSnapshot(BaseModel):
    """对外发布的价格快照."""

    model_config = ConfigDict(frozen=True)

    international: float = 0.0
    domestic: float = 0.0
    rate: float = 0.0
    market_closed: bool = False
    domestic_source: DomesticSource = DomesticSource.NONE
    published_at: datetime | None = None
    sources: tuple[str, ...] = Field(default_factory=tuple)

    @field_serializer("published_at", when_used="json")
    def serialize_datetime(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        return value.isoformat()

    @property
    def has_prices(self) -> bool:
        return self.domestic > 0 or self.international > 0

    def as_mapping(self) -> dict[str, Any]:
        """Key/value view consumed by presentation layers."""

        return {
            "international": self.international,
            "domestic": self.domestic,
            "rate": self.rate,
            "market_closed": self.market_closed,
        }


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
