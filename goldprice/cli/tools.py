"""Offline helper commands: conversion, market hours and position averaging."""

from __future__ import annotations

from datetime import datetime

import typer

from goldprice.core.exceptions import DataValidationError
from goldprice.core.services.display import format_price
from goldprice.core.services.market_clock import MarketClock, to_exchange_time
from goldprice.core.services.position import average_cost
from goldprice.core.services.pricing import convert

from .constants import VALIDATION_EXIT_CODE
from .utils import fail, fail_with, open_output

CONVERT_COLUMNS = ["international", "rate", "domestic"]
MARKET_COLUMNS = ["time", "phase", "closed"]
AVERAGE_COLUMNS = ["total_weight", "average_price"]


def register(app: typer.Typer) -> None:
    """Register helper commands on the provided application."""

    app.command("convert")(convert_command)
    app.command("market-status")(market_status_command)
    app.command("average")(average_command)


def get_market_clock() -> MarketClock:
    """Factory hook for obtaining the exchange clock."""

    return MarketClock()


def convert_command(
    ctx: typer.Context,
    international: float = typer.Argument(..., help="International price in USD per troy ounce."),
    rate: float = typer.Argument(..., help="USD/CNY exchange rate."),
) -> None:
    """Convert an international quote into CNY per gram."""

    row = {"international": international, "rate": rate, "domestic": format_price(convert(international, rate))}
    with open_output(ctx) as output:
        output.write([row], CONVERT_COLUMNS)


def market_status_command(
    ctx: typer.Context,
    at: str | None = typer.Option(
        None,
        "--at",
        help="ISO-8601 instant to classify; naive values are Asia/Shanghai time.",
    ),
) -> None:
    """Show whether the Shanghai Gold Exchange is trading."""

    clock = get_market_clock()
    if at is None:
        moment = clock.now()
    else:
        try:
            moment = to_exchange_time(datetime.fromisoformat(at))
        except ValueError as exc:
            fail(
                f"Invalid ISO-8601 instant '{at}'.",
                "INVALID_INSTANT",
                exit_code=VALIDATION_EXIT_CODE,
                details={"at": at},
                cause=exc,
            )

    phase = clock.phase(moment)
    with open_output(ctx) as output:
        output.write([{"time": moment.isoformat(), "phase": phase.value, "closed": phase.closed}], MARKET_COLUMNS)


def average_command(
    ctx: typer.Context,
    current_weight: float = typer.Argument(..., help="Grams already held."),
    current_price: float = typer.Argument(..., help="Average CNY/g of the current holding."),
    added_weight: float = typer.Argument(..., help="Grams being added."),
    added_price: float = typer.Argument(..., help="CNY/g paid for the added grams."),
) -> None:
    """Compute the average cost after adding to a position."""

    try:
        position = average_cost(current_weight, current_price, added_weight, added_price)
    except DataValidationError as error:
        fail_with(error, VALIDATION_EXIT_CODE)

    row = {
        "total_weight": f"{position.total_weight:.2f}",
        "average_price": f"{position.average_price:.2f}",
    }
    with open_output(ctx) as output:
        output.write([row], AVERAGE_COLUMNS)


__all__ = ["get_market_clock", "register"]
