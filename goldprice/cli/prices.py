"""Commands that poll the quote sources."""

from __future__ import annotations

import asyncio

import typer

from goldprice.core.client import GoldPriceClient
from goldprice.core.config import GoldPriceConfig
from goldprice.core.exceptions import GoldPriceError
from goldprice.core.models import PublishedSnapshot
from goldprice.core.services.alerts import AlertMonitor
from goldprice.core.services.display import VisibilityWindow

from .constants import SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import CommandOutput, fail, fail_with, get_config, open_output


def register(app: typer.Typer) -> None:
    """Register price commands on the provided application."""

    app.command("snapshot")(snapshot_command)
    app.command("watch")(watch_command)


def get_client(config: GoldPriceConfig) -> GoldPriceClient:
    """Factory hook for obtaining a client instance."""

    return GoldPriceClient(config)


class SnapshotPrinter:
    """Writes each polled snapshot inside the visibility window, then the alerts it fired."""

    def __init__(self, output: CommandOutput, alerts: AlertMonitor, visibility: VisibilityWindow) -> None:
        self._output = output
        self._alerts = alerts
        self._visibility = visibility
        self._previous: PublishedSnapshot | None = None

    def handle(self, snapshot: PublishedSnapshot) -> None:
        fired = self._alerts.evaluate(snapshot)
        if self._visibility.should_display(snapshot.domestic, snapshot.international):
            self._output.snapshot(snapshot, self._previous, live=True)
            if snapshot.domestic > 0:
                self._previous = snapshot
        for alert in fired:
            self._output.alert(alert)


async def _poll_once(client: GoldPriceClient) -> PublishedSnapshot:
    async with client:
        return await client.snapshot()


async def _watch(client: GoldPriceClient, printer: SnapshotPrinter, cycles: int | None) -> None:
    async with client:
        await client.watch(printer.handle, cycles=cycles)


def _run_engine(output: CommandOutput, coroutine) -> PublishedSnapshot | None:
    """Run ``coroutine`` to completion, turning engine failures into exit code 1."""

    try:
        return asyncio.run(coroutine)
    except KeyboardInterrupt:
        return None
    except GoldPriceError as error:
        output.stack.close()
        fail_with(error, SYSTEM_EXIT_CODE)
    except Exception as exc:
        output.stack.close()
        fail(f"{type(exc).__name__}: {exc}", "ENGINE_ERROR", exit_code=SYSTEM_EXIT_CODE, cause=exc)


def snapshot_command(ctx: typer.Context) -> None:
    """Run one poll cycle and print the reconciled prices."""

    output = open_output(ctx)
    snapshot = _run_engine(output, _poll_once(get_client(get_config(ctx))))
    with output:
        if snapshot is not None:
            output.snapshot(snapshot)


def watch_command(
    ctx: typer.Context,
    interval: float | None = typer.Option(None, "--interval", help="Seconds between poll cycles."),
    cycles: int | None = typer.Option(None, "--cycles", help="Stop after this many cycles."),
) -> None:
    """Poll continuously, printing every snapshot and any price alerts."""

    config = get_config(ctx)
    if interval is not None:
        if interval <= 0:
            fail("Interval must be positive.", "INVALID_INTERVAL", exit_code=VALIDATION_EXIT_CODE, details={"interval": interval})
        config = config.model_copy(update={"polling": config.polling.model_copy(update={"interval": interval})})
    if cycles is not None and cycles <= 0:
        fail("Cycles must be positive.", "INVALID_CYCLES", exit_code=VALIDATION_EXIT_CODE, details={"cycles": cycles})

    output = open_output(ctx)
    client = get_client(config)
    printer = SnapshotPrinter(output, client.alerts, client.visibility)
    with output:
        _run_engine(output, _watch(client, printer, cycles))


__all__ = ["SnapshotPrinter", "get_client", "register"]
