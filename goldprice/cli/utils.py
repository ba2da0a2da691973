"""Helpers shared by the goldprice commands: context access, output targets and row shaping."""

from __future__ import annotations

import json
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Mapping, NoReturn, Sequence, TextIO

import typer

from goldprice.core.config import GoldPriceConfig
from goldprice.core.exceptions import GoldPriceError
from goldprice.core.models import PublishedSnapshot
from goldprice.core.services.alerts import PriceAlert
from goldprice.core.services.display import Trend, format_price, trend

from .constants import VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, TableFormatter, create_formatter

TABLE_COLUMNS = ["time", "domestic", "international", "rate", "market", "source"]
DATA_COLUMNS = ["time", "international", "domestic", "rate", "market_closed", "domestic_source"]
ALERT_TABLE_COLUMNS = ["title", "message"]


@dataclass(slots=True)
class CommandOutput:
    """Formatter plus the stream a command writes to; a file target is closed on exit."""

    formatter: OutputFormatter
    stream: TextIO
    stack: ExitStack = field(default_factory=ExitStack)

    @property
    def tabular(self) -> bool:
        return isinstance(self.formatter, TableFormatter)

    def __enter__(self) -> CommandOutput:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stack.close()

    def write(self, rows: Sequence[Mapping[str, object]], columns: Sequence[str] | None = None) -> None:
        self.formatter.render(rows, stream=self.stream, columns=columns)

    def emit(self, row: Mapping[str, object], columns: Sequence[str] | None = None) -> None:
        self.formatter.emit(row, stream=self.stream, columns=columns)

    def snapshot(self, snapshot: PublishedSnapshot, previous: PublishedSnapshot | None = None, *, live: bool = False) -> None:
        if self.tabular:
            row, columns = display_row(snapshot, previous), TABLE_COLUMNS
        else:
            row, columns = data_row(snapshot), DATA_COLUMNS
        if live:
            self.emit(row, columns)
        else:
            self.write([row], columns)

    def alert(self, alert: PriceAlert) -> None:
        self.emit(alert_row(alert), ALERT_TABLE_COLUMNS if self.tabular else None)


def get_config(ctx: typer.Context) -> GoldPriceConfig:
    """Configuration loaded by the root callback, or defaults."""

    ctx.ensure_object(dict)
    config = (ctx.obj or {}).get("config")
    return config if config is not None else GoldPriceConfig()


def open_output(ctx: typer.Context) -> CommandOutput:
    """Build the output target chosen by ``--format``, ``--no-color`` and ``--output``."""

    ctx.ensure_object(dict)
    settings = ctx.obj or {}
    # the root callback has already rejected unknown formats
    formatter = create_formatter(str(settings.get("format", "table")), no_color=bool(settings.get("no_color")))

    output = CommandOutput(formatter, sys.stdout)
    path = settings.get("output_path")
    if path is None:
        return output

    try:
        output.stream = output.stack.enter_context(open(path, "w", encoding="utf-8"))
    except OSError as exc:
        output.stack.close()
        fail(f"Unable to open '{path}': {exc}", "OUTPUT_WRITE_ERROR", exit_code=VALIDATION_EXIT_CODE, cause=exc)
    return output


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def fail(
    message: str,
    code: str,
    *,
    exit_code: int,
    details: Mapping[str, object] | None = None,
    cause: BaseException | None = None,
) -> NoReturn:
    """Report an error payload and leave the command with ``exit_code``."""

    emit_error(message, code, details=details)
    raise typer.Exit(code=exit_code) from cause


def fail_with(error: GoldPriceError, exit_code: int) -> NoReturn:
    fail(error.message, error.error_code, exit_code=exit_code, details=error.details, cause=error)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


def _with_arrow(value: float, direction: Trend) -> str:
    text = format_price(value)
    if direction.color is None:
        return text
    return f"{text} [{direction.color}]{direction.arrow}[/]"


def data_row(snapshot: PublishedSnapshot) -> dict[str, object]:
    """Machine-readable row: the four published values plus time and provenance."""

    return {
        "time": snapshot.published_at.isoformat() if snapshot.published_at else None,
        **snapshot.as_mapping(),
        "domestic_source": snapshot.domestic_source.value,
    }


def display_row(snapshot: PublishedSnapshot, previous: PublishedSnapshot | None = None) -> dict[str, object]:
    """Human-readable row with "--" placeholders and trend arrows against ``previous``."""

    domestic_trend = trend(snapshot.domestic, previous.domestic) if previous else Trend.NONE
    international_trend = trend(snapshot.international, previous.international) if previous else Trend.NONE
    published = snapshot.published_at
    return {
        "time": published.strftime("%Y-%m-%d %H:%M:%S") if published else None,
        "domestic": _with_arrow(snapshot.domestic, domestic_trend),
        "international": _with_arrow(snapshot.international, international_trend),
        "rate": f"{snapshot.rate:.4f}",
        "market": "closed" if snapshot.market_closed else "open",
        "source": snapshot.domestic_source.value,
    }


def alert_row(alert: PriceAlert) -> dict[str, object]:
    return {
        "alert": alert.kind.value,
        "title": alert.title,
        "message": alert.message,
        "price": alert.price,
        "threshold": alert.threshold,
    }


__all__ = [
    "CommandOutput",
    "alert_row",
    "data_row",
    "display_row",
    "emit_error",
    "fail",
    "fail_with",
    "get_config",
    "open_output",
]
