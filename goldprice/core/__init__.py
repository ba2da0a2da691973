"""Core price engine: sources, reconciliation, scheduling."""

from goldprice.core.client import GoldPriceClient
from goldprice.core.config import GoldPriceConfig, load_config

__all__ = ["GoldPriceClient", "GoldPriceConfig", "load_config"]
