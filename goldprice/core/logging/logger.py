"""JSON-lines logging on loguru, tagged with the poll cycle that emitted each record."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from goldprice.core.logging.config import LogConfig

_ACTIVE_TRACE: ContextVar[str | None] = ContextVar("goldprice_trace_id", default=None)
_ACTIVE_FIELDS: ContextVar[dict[str, Any]] = ContextVar("goldprice_log_fields", default={})

# Top-level record keys; anything else bound on a record lands under "context".
RECORD_KEYS = ("trace_id", "cycle", "source", "field", "error_code")


def _tag_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    for key, value in _ACTIVE_FIELDS.get().items():
        extra.setdefault(key, value)
    if not extra.get("trace_id"):
        extra["trace_id"] = _ACTIVE_TRACE.get() or uuid4().hex


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    # enums such as Quantity and DomesticSource
    return getattr(value, "value", str(value))


def render_record(record: dict[str, Any]) -> str:
    """Serialise a loguru record to one JSON line without the trailing newline."""

    extra = dict(record["extra"])
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    for key in RECORD_KEYS:
        payload[key] = extra.pop(key, None)
    if extra:
        payload["context"] = extra
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"].value)
    return json.dumps(payload, default=_encode, ensure_ascii=False)


class JsonLinesSink:
    """Writes each record as a JSON line to an open stream or appends it to a file."""

    def __init__(self, target: IO[str] | str | Path) -> None:
        self._stream: IO[str] | None = None
        self._path: Path | None = None
        if isinstance(target, (str, Path)):
            self._path = Path(target)
            self._path.parent.mkdir(parents=True, exist_ok=True)
        else:
            self._stream = target

    def __call__(self, message: Any) -> None:
        line = render_record(message.record) + "\n"
        if self._stream is not None:
            self._stream.write(line)
            self._stream.flush()
            return
        with self._path.open("a", encoding="utf-8") as handle:  # pragma: no cover - file IO
            handle.write(line)


def configure_logging(level: str = "INFO", **options: Any) -> LogConfig:
    """Replace all loguru handlers with JSON sinks built from ``LogConfig`` options.

    Raises ``ValueError`` for an unknown level name.
    """

    config = LogConfig(level=level, **options)
    level_name = config.level.upper()
    logger.level(level_name)

    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": JsonLinesSink(config.console_stream or sys.stderr), "level": level_name})
    if config.file_output and config.file_path:
        handlers.append({"sink": JsonLinesSink(config.file_path), "level": level_name})
    logger.configure(handlers=handlers, patcher=_tag_record, extra=dict(config.extra))
    return config


@contextmanager
def log_context(*, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Tag every record emitted inside the block with one trace id and ``fields``.

    Poll cycles use ``log_context(cycle=n)`` so that all fetch warnings of a
    cycle share a trace id and cycle number.
    """

    active = trace_id or uuid4().hex
    trace_token = _ACTIVE_TRACE.set(active)
    fields_token = _ACTIVE_FIELDS.set({**_ACTIVE_FIELDS.get(), **fields})
    try:
        yield active
    finally:
        _ACTIVE_FIELDS.reset(fields_token)
        _ACTIVE_TRACE.reset(trace_token)


configure_logging()


__all__ = ["JsonLinesSink", "RECORD_KEYS", "configure_logging", "log_context", "logger", "render_record"]
