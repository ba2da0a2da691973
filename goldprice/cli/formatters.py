"""Output formatters shared by the one-shot and the live commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

Row = Mapping[str, object]


def _columns_for(rows: Sequence[Row], columns: Sequence[str] | None) -> list[str]:
    if columns:
        return list(columns)
    return list(rows[0].keys()) if rows else []


class OutputFormatter:
    """Base class for CLI output formatters.

    ``render`` writes a finished result set; ``emit`` writes one record of a
    live stream as soon as it is produced.
    """

    name: str

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        raise NotImplementedError

    def emit(self, row: Row, *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        self.render([row], stream=stream, columns=columns)


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Rich tables for result sets, one markup line per live record."""

    name: str = "table"
    no_color: bool = False

    def _console(self, stream: TextIO) -> Console:
        return Console(
            file=stream,
            color_system=None if self.no_color else "auto",
            no_color=self.no_color,
            highlight=False,
        )

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        console = self._console(stream)
        if not rows:
            console.print("No data available.")
            return

        resolved = _columns_for(rows, columns)
        table = Table(box=SIMPLE, show_lines=False)
        for column in resolved:
            justify = "right" if isinstance(rows[0].get(column), (int, float)) else "left"
            table.add_column(column, header_style="" if self.no_color else "bold", justify=justify)
        for row in rows:
            table.add_row(*(self._format_cell(row.get(column)) for column in resolved))
        console.print(table)

    def emit(self, row: Row, *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        resolved = _columns_for([row], columns)
        self._console(stream).print("  ".join(self._format_cell(row.get(column)) for column in resolved))

    @staticmethod
    def _format_cell(value: object) -> str:
        if value is None:
            return "-"
        if isinstance(value, bool):
            return "yes" if value else "no"
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """One JSON object per line, flushed after every write."""

    name: str = "jsonl"

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        for row in rows:
            record = {column: row.get(column) for column in columns} if columns else dict(row)
            stream.write(json.dumps(record, ensure_ascii=False, default=str))
            stream.write("\n")
        stream.flush()


FORMATTERS = {"table": TableFormatter, "jsonl": JSONLFormatter}


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized in FORMATTERS:
        return FORMATTERS[normalized]()
    msg = f"Unsupported format '{name}'. Available formats: {', '.join(FORMATTERS)}."
    raise ValueError(msg)


__all__ = ["FORMATTERS", "JSONLFormatter", "OutputFormatter", "TableFormatter", "create_formatter"]
