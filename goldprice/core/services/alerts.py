"""Threshold alerts on published prices."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from goldprice.core.config import AlertConfig
from goldprice.core.logging import logger
from goldprice.core.models import PublishedSnapshot, Quantity

DEFAULT_COOLDOWN_SECONDS = 600.0


class AlertKind(str, Enum):
    DOMESTIC_MAX = "domestic_max"
    DOMESTIC_MIN = "domestic_min"
    INTERNATIONAL_MAX = "international_max"
    INTERNATIONAL_MIN = "international_min"


_TITLES = {
    Quantity.DOMESTIC: "国内金价预警",
    Quantity.INTERNATIONAL: "国际金价预警",
}


@dataclass(frozen=True)
class AlertThresholds:
    """Upper and lower alert bounds; 0 disables a bound."""

    domestic_max: float = 0.0
    domestic_min: float = 0.0
    international_max: float = 0.0
    international_min: float = 0.0

    @classmethod
    def from_config(cls, config: AlertConfig) -> AlertThresholds:
        return cls(
            domestic_max=config.domestic_max,
            domestic_min=config.domestic_min,
            international_max=config.international_max,
            international_min=config.international_min,
        )


@dataclass(frozen=True)
class PriceAlert:
    kind: AlertKind
    quantity: Quantity
    price: float
    threshold: float

    @property
    def above(self) -> bool:
        return self.kind in (AlertKind.DOMESTIC_MAX, AlertKind.INTERNATIONAL_MAX)

    @property
    def title(self) -> str:
        return _TITLES[self.quantity]

    @property
    def message(self) -> str:
        direction = "高于" if self.above else "低于"
        return f"当前价格: {self.price:.2f} ({direction} {self.threshold:.2f})"


def breached(snapshot: PublishedSnapshot, thresholds: AlertThresholds) -> list[PriceAlert]:
    """Alerts whose bound ``snapshot`` crosses, ignoring cooldowns."""

    domestic = snapshot.domestic
    international = snapshot.international
    if domestic <= 0 and international <= 0:
        return []

    alerts: list[PriceAlert] = []
    if thresholds.domestic_max > 0 and domestic >= thresholds.domestic_max:
        alerts.append(PriceAlert(AlertKind.DOMESTIC_MAX, Quantity.DOMESTIC, domestic, thresholds.domestic_max))
    if thresholds.domestic_min > 0 and 0 < domestic <= thresholds.domestic_min:
        alerts.append(PriceAlert(AlertKind.DOMESTIC_MIN, Quantity.DOMESTIC, domestic, thresholds.domestic_min))
    if thresholds.international_max > 0 and international >= thresholds.international_max:
        alerts.append(
            PriceAlert(AlertKind.INTERNATIONAL_MAX, Quantity.INTERNATIONAL, international, thresholds.international_max)
        )
    if thresholds.international_min > 0 and 0 < international <= thresholds.international_min:
        alerts.append(
            PriceAlert(AlertKind.INTERNATIONAL_MIN, Quantity.INTERNATIONAL, international, thresholds.international_min)
        )
    return alerts


class AlertMonitor:
    """Fires threshold alerts, at most once per kind within the cooldown."""

    def __init__(
        self,
        thresholds: AlertThresholds,
        cooldown: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if cooldown < 0:
            raise ValueError("cooldown must be non-negative")
        self.thresholds = thresholds
        self._cooldown = cooldown
        self._clock = clock
        self._last_fired: dict[AlertKind, float] = {}

    @classmethod
    def from_config(cls, config: AlertConfig, clock: Callable[[], float] = time.monotonic) -> AlertMonitor:
        return cls(AlertThresholds.from_config(config), cooldown=config.cooldown_seconds, clock=clock)

    def evaluate(self, snapshot: PublishedSnapshot) -> list[PriceAlert]:
        now = self._clock()
        fired: list[PriceAlert] = []
        for alert in breached(snapshot, self.thresholds):
            last = self._last_fired.get(alert.kind)
            if last is not None and now - last <= self._cooldown:
                continue
            self._last_fired[alert.kind] = now
            logger.info(alert.title, alert=alert.kind.value, price=alert.price, threshold=alert.threshold)
            fired.append(alert)
        return fired


__all__ = ["AlertKind", "AlertMonitor", "AlertThresholds", "PriceAlert", "breached"]
