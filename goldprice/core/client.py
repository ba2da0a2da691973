"""goldprice主客户端 - 组装数据源、对账器和轮询器"""

from __future__ import annotations

from typing import Any

import httpx

from goldprice.core.config import GoldPriceConfig
from goldprice.core.models import PublishedSnapshot
from goldprice.core.services.alerts import AlertMonitor
from goldprice.core.services.assembler import SnapshotAssembler
from goldprice.core.services.display import VisibilityWindow
from goldprice.core.services.market_clock import Clock, MarketClock
from goldprice.core.services.poller import PricePoller, SnapshotCallback
from goldprice.core.services.reconciler import PriceReconciler


class GoldPriceClient:
    """goldprice主客户端

    One client owns one last-known-good cache, so repeated snapshots from the
    same client fall back on each other's values.
    """

    def __init__(
        self,
        config: GoldPriceConfig | None = None,
        *,
        clock: Clock | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化客户端

        Args:
            config: 配置, 默认读取环境变量
            clock: 返回当前时间的函数, 用于判断休市
            transport: 注入的 httpx transport, 测试时使用
        """
        self.config = config or GoldPriceConfig()
        self.market_clock = MarketClock(clock)
        self.reconciler = PriceReconciler(self.market_clock)
        self.assembler = SnapshotAssembler.from_config(self.config.sources, transport=transport)
        self.poller = PricePoller(
            self.assembler,
            self.reconciler,
            interval=self.config.polling.interval,
        )
        self.alerts = AlertMonitor.from_config(self.config.alerts)
        self.visibility = VisibilityWindow.from_config(self.config.visibility)

    async def __aenter__(self) -> GoldPriceClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def snapshot(self) -> PublishedSnapshot:
        """执行一次轮询并返回快照"""
        return await self.poller.poll_once()

    async def watch(self, callback: SnapshotCallback, cycles: int | None = None) -> None:
        """持续轮询, 每个快照都交给 ``callback``"""
        self.poller.subscribe(callback)
        await self.poller.run(max_cycles=cycles)

    def stop(self) -> None:
        self.poller.stop()

    async def close(self) -> None:
        await self.poller.close()


__all__ = ["GoldPriceClient"]
