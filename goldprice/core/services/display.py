"""Presentation helpers shared by every consumer of published snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from goldprice.core.config import VisibilityConfig

PLACEHOLDER = "--"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    NONE = "none"

    @property
    def arrow(self) -> str:
        return {Trend.UP: "▲", Trend.DOWN: "▼"}.get(self, "")

    @property
    def color(self) -> str | None:
        # red for rising, green for falling (CN market convention)
        return {Trend.UP: "red", Trend.DOWN: "green"}.get(self)


def trend(current: float, previous: float) -> Trend:
    if previous <= 0:
        return Trend.NONE
    if current > previous:
        return Trend.UP
    if current < previous:
        return Trend.DOWN
    return Trend.FLAT


def format_price(value: float) -> str:
    if value <= 0:
        return PLACEHOLDER
    return f"{value:.2f}"


@dataclass(frozen=True)
class VisibilityWindow:
    """Price range inside which prices are shown; a window of two zero bounds matches everything."""

    enabled: bool = False
    domestic_min: float = 0.0
    domestic_max: float = 0.0
    international_min: float = 0.0
    international_max: float = 0.0

    @classmethod
    def from_config(cls, config: VisibilityConfig) -> VisibilityWindow:
        return cls(
            enabled=config.enabled,
            domestic_min=config.domestic_min,
            domestic_max=config.domestic_max,
            international_min=config.international_min,
            international_max=config.international_max,
        )

    @staticmethod
    def _within(value: float, low: float, high: float) -> bool:
        if low == 0 and high == 0:
            return True
        return low <= value <= high

    def should_display(self, domestic: float, international: float) -> bool:
        if not self.enabled:
            return True
        return self._within(domestic, self.domestic_min, self.domestic_max) and self._within(
            international, self.international_min, self.international_max
        )


__all__ = ["PLACEHOLDER", "Trend", "VisibilityWindow", "format_price", "trend"]
