"""Exception handling module."""

from goldprice.core.exceptions.base import (
    ConfigurationError,
    DataValidationError,
    GoldPriceError,
    PayloadParseError,
    SourceError,
)

__all__ = [
    "GoldPriceError",
    "SourceError",
    "PayloadParseError",
    "ConfigurationError",
    "DataValidationError",
]
