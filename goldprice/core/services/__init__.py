"""Price engine services."""

from goldprice.core.services.alerts import AlertKind, AlertMonitor, AlertThresholds, PriceAlert
from goldprice.core.services.assembler import SnapshotAssembler
from goldprice.core.services.display import PLACEHOLDER, Trend, VisibilityWindow, format_price, trend
from goldprice.core.services.last_known_good import LastKnownGoodCache
from goldprice.core.services.market_clock import MarketClock, MarketPhase, shanghai_now
from goldprice.core.services.poller import PricePoller
from goldprice.core.services.position import AveragePosition, average_cost
from goldprice.core.services.pricing import GRAMS_PER_TROY_OUNCE, convert, round_half_up
from goldprice.core.services.reconciler import PriceReconciler, ReconcileResult, reconcile

__all__ = [
    "AlertKind",
    "AlertMonitor",
    "AlertThresholds",
    "AveragePosition",
    "GRAMS_PER_TROY_OUNCE",
    "LastKnownGoodCache",
    "MarketClock",
    "MarketPhase",
    "PLACEHOLDER",
    "PriceAlert",
    "PricePoller",
    "PriceReconciler",
    "ReconcileResult",
    "SnapshotAssembler",
    "Trend",
    "VisibilityWindow",
    "average_cost",
    "convert",
    "format_price",
    "reconcile",
    "round_half_up",
    "shanghai_now",
    "trend",
]
