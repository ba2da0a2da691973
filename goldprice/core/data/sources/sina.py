"""Sina finance quote feed (``hq.sinajs.cn``).

The body is JavaScript, one statement per symbol::

    var hq_str_hf_XAU="2034.50,2031.10,...";
    var hq_str_gds_AUTD="478.20,0,477.90,...";
    var hq_str_USDCNY="15:29:58,7.1801,7.1795,7.1823,...";

Each series is read independently; a bad field leaves the others intact.
"""

from __future__ import annotations

import re
from dataclasses import replace
from enum import Enum

import httpx

from goldprice.core.data.sources.base import SourceFetcher, parse_price
from goldprice.core.exceptions import PayloadParseError
from goldprice.core.http_adapter import HttpConfig
from goldprice.core.logging import logger
from goldprice.core.models import Quantity, SourceReading

SOURCE_NAME = "sina"

SYMBOLS: dict[str, Quantity] = {
    "hf_XAU": Quantity.INTERNATIONAL,
    "gds_AUTD": Quantity.DOMESTIC,
    "USDCNY": Quantity.RATE,
}

_STATEMENT_SPLIT = re.compile(r"[;\r\n]+")
_VARIABLE = re.compile(r"hq_str_(?P<symbol>\w+)\s*=")


class RateLineLayout(Enum):
    """Historical layouts of the USDCNY series."""

    LEGACY = "legacy"  # name,value,...
    QUOTE_TIME = "quote_time"  # HH:MM:SS,open,preclose,current,...

    @property
    def rate_index(self) -> int:
        return 3 if self is RateLineLayout.QUOTE_TIME else 1

    @classmethod
    def detect(cls, fields: list[str]) -> RateLineLayout:
        return cls.QUOTE_TIME if ":" in fields[0] else cls.LEGACY


def extract_fields(statement: str) -> list[str]:
    """Comma-separated fields between the first and last double quote."""

    start = statement.find('"')
    end = statement.rfind('"')
    if start < 0 or end <= start:
        raise PayloadParseError("statement has no quoted value", provider_name=SOURCE_NAME)
    return statement[start + 1 : end].split(",")


def parse_rate_fields(fields: list[str]) -> float:
    layout = RateLineLayout.detect(fields)
    if len(fields) <= layout.rate_index:
        raise PayloadParseError(
            f"{layout.value} rate line has {len(fields)} fields",
            provider_name=SOURCE_NAME,
            field=Quantity.RATE.value,
        )
    return parse_price(fields[layout.rate_index], SOURCE_NAME, Quantity.RATE.value)


def parse_statement(quantity: Quantity, statement: str) -> float:
    fields = extract_fields(statement)
    if quantity is Quantity.RATE:
        return parse_rate_fields(fields)
    return parse_price(fields[0], SOURCE_NAME, quantity.value)


def parse_sina_payload(body: str) -> SourceReading:
    """Read all known series from a Sina response body."""

    values: dict[str, float] = {}
    errors: list[str] = []
    for statement in _STATEMENT_SPLIT.split(body):
        match = _VARIABLE.search(statement)
        if match is None:
            continue
        quantity = SYMBOLS.get(match.group("symbol"))
        if quantity is None:
            continue
        try:
            values[quantity.value] = parse_statement(quantity, statement)
        except PayloadParseError as exc:
            errors.append(f"{quantity.value}: {exc.message}")
            logger.warning(
                "Sina field rejected",
                source=SOURCE_NAME,
                error_code=exc.error_code,
                field=quantity.value,
                error=exc.message,
            )

    if not values and not errors:
        raise PayloadParseError("no known symbols in response", provider_name=SOURCE_NAME)
    error = "; ".join(errors) if errors and not values else None
    return SourceReading(source=SOURCE_NAME, error=error, **values)


class SinaQuoteFetcher(SourceFetcher):
    """Primary source for all three quantities."""

    def __init__(
        self,
        url: str,
        referer: str,
        http_config: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base = http_config or HttpConfig()
        config = replace(base, headers={**base.headers, "Referer": referer})
        super().__init__(SOURCE_NAME, url, http_config=config, transport=transport)

    def parse(self, body: str) -> SourceReading:
        return parse_sina_payload(body)


__all__ = [
    "RateLineLayout",
    "SinaQuoteFetcher",
    "extract_fields",
    "parse_rate_fields",
    "parse_sina_payload",
]
