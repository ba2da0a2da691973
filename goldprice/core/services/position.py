"""Average holding cost after adding to a gold position."""

from __future__ import annotations

from dataclasses import dataclass

from goldprice.core.exceptions import DataValidationError


@dataclass(frozen=True)
class AveragePosition:
    total_weight: float
    average_price: float


def average_cost(
    current_weight: float,
    current_price: float,
    added_weight: float,
    added_price: float,
) -> AveragePosition:
    """Weighted average CNY/g price of the combined holding.

    Raises:
        DataValidationError: if any input is negative.
    """
    inputs = {
        "current_weight": current_weight,
        "current_price": current_price,
        "added_weight": added_weight,
        "added_price": added_price,
    }
    negative = {name: value for name, value in inputs.items() if value < 0}
    if negative:
        raise DataValidationError("position inputs must be non-negative", validation_errors=negative)

    total_weight = current_weight + added_weight
    if total_weight <= 0:
        return AveragePosition(total_weight=0.0, average_price=0.0)

    total_cost = current_weight * current_price + added_weight * added_price
    return AveragePosition(total_weight=total_weight, average_price=total_cost / total_weight)


__all__ = ["AveragePosition", "average_cost"]
