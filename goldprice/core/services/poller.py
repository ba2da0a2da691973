"""Single-slot poll loop driving assemble -> reconcile -> publish."""

from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable

from goldprice.core.logging import log_context, logger
from goldprice.core.models import PublishedSnapshot
from goldprice.core.services.assembler import SnapshotAssembler
from goldprice.core.services.reconciler import PriceReconciler

SnapshotCallback = Callable[[PublishedSnapshot], Awaitable[None] | None]


class PricePoller:
    """Runs poll cycles one after another at a fixed interval.

    A cycle never overlaps the previous one. The next cycle starts ``interval``
    seconds after the previous one started, or immediately when it overran.
    """

    def __init__(
        self,
        assembler: SnapshotAssembler,
        reconciler: PriceReconciler | None = None,
        interval: float = 2.0,
        *,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._assembler = assembler
        self._reconciler = reconciler or PriceReconciler()
        self._interval = interval
        self._monotonic = monotonic
        self._sleep = sleep
        self._subscribers: list[SnapshotCallback] = []
        self._stop_requested = False
        self.cycles = 0
        self.latest: PublishedSnapshot | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def reconciler(self) -> PriceReconciler:
        return self._reconciler

    def subscribe(self, callback: SnapshotCallback) -> None:
        self._subscribers.append(callback)

    async def poll_once(self) -> PublishedSnapshot:
        self.cycles += 1
        with log_context(cycle=self.cycles):
            raw = await self._assembler.assemble()
            snapshot = self._reconciler.reconcile(raw)
            logger.debug(
                "Snapshot published",
                international=snapshot.international,
                domestic=snapshot.domestic,
                rate=snapshot.rate,
                market_closed=snapshot.market_closed,
                domestic_source=snapshot.domestic_source.value,
            )
            self.latest = snapshot
            await self._notify(snapshot)
        return snapshot

    async def _notify(self, snapshot: PublishedSnapshot) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.opt(exception=exc).error("Snapshot subscriber failed", subscriber=repr(callback))

    async def run(self, max_cycles: int | None = None) -> None:
        """Poll until :meth:`stop` is called or ``max_cycles`` cycles have run."""

        self._stop_requested = False
        completed = 0
        while not self._stop_requested:
            started = self._monotonic()
            await self.poll_once()
            completed += 1
            if self._stop_requested or (max_cycles is not None and completed >= max_cycles):
                break
            elapsed = self._monotonic() - started
            await self._sleep(max(0.0, self._interval - elapsed))

    def stop(self) -> None:
        self._stop_requested = True

    async def close(self) -> None:
        await self._assembler.close()


__all__ = ["PricePoller", "SnapshotCallback"]
