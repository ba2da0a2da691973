"""Logging utilities for monitoring and debugging."""

from goldprice.core.logging.config import LogConfig
from goldprice.core.logging.logger import configure_logging, log_context, logger

__all__ = ["LogConfig", "configure_logging", "log_context", "logger"]
