"""International (USD/ozt) to domestic (CNY/g) gold price conversion."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

# 1 金衡盎司 = 31.1034768 克
GRAMS_PER_TROY_OUNCE = 31.1034768


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half-up on its exact binary value (never banker's rounding)."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def cross_rate_price(international: float, rate: float) -> float:
    """Unrounded CNY/g price implied by an international quote and a USD/CNY rate."""

    return (international / GRAMS_PER_TROY_OUNCE) * rate


def convert(international: float, rate: float) -> float:
    """Domestic price in CNY/g rounded to two decimals, or 0 when either input is not positive."""

    if international <= 0 or rate <= 0:
        return 0.0
    return round_half_up(cross_rate_price(international, rate))


__all__ = ["GRAMS_PER_TROY_OUNCE", "convert", "cross_rate_price", "round_half_up"]
