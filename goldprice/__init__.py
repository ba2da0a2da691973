"""goldprice - 黄金价格跟踪引擎

Fetches the Shanghai Au(T+D) price, the London spot price and the USD/CNY
rate, and reconciles them into one domestic price per poll cycle.
"""

import asyncio

from goldprice.core.client import GoldPriceClient
from goldprice.core.config import GoldPriceConfig, load_config
from goldprice.core.models import PublishedSnapshot
from goldprice.core.services import MarketClock, convert

__version__ = "0.3.0"


def get_snapshot(config: GoldPriceConfig | None = None) -> PublishedSnapshot:
    """同步获取一次价格快照

    Examples:
        >>> import goldprice
        >>> snapshot = goldprice.get_snapshot()
    """
    return asyncio.run(get_snapshot_async(config))


async def get_snapshot_async(config: GoldPriceConfig | None = None) -> PublishedSnapshot:
    """异步获取一次价格快照"""
    async with GoldPriceClient(config) as client:
        return await client.snapshot()


__all__ = [
    "GoldPriceClient",
    "GoldPriceConfig",
    "MarketClock",
    "PublishedSnapshot",
    "convert",
    "get_snapshot",
    "get_snapshot_async",
    "load_config",
]
