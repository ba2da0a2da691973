"""Pytest configuration for goldprice test suite."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator

import pytest

from goldprice.core.logging import configure_logging
from goldprice.core.models import RawReading
from goldprice.core.services.market_clock import SHANGHAI


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--goldprice-run-integration",
        action="store_true",
        default=False,
        help="Run goldprice integration tests that query the live quote feeds.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for goldprice tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks goldprice tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--goldprice-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --goldprice-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    """Keep log sinks off the real stderr between tests."""

    configure_logging(level="CRITICAL")
    yield
    configure_logging(level="CRITICAL")


def shanghai(year: int, month: int, day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=SHANGHAI)


@pytest.fixture()
def open_moment() -> datetime:
    """Monday 2023-10-23 10:00, inside the day session."""

    return shanghai(2023, 10, 23, 10)


@pytest.fixture()
def closed_moment() -> datetime:
    """Sunday 2023-10-29 12:00."""

    return shanghai(2023, 10, 29, 12)


@pytest.fixture()
def sample_raw() -> RawReading:
    return RawReading(international=2000.0, domestic=452.0, rate=7.0, sources=("sina",))
