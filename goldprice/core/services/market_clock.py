"""Shanghai Gold Exchange session calendar.

The exchange runs a day session (09:00-11:30, 13:30-15:30) and a night session
(20:00 until 02:30 the next morning), Monday to Friday. The night session that
starts on Friday evening runs into Saturday morning; there is no session rolling
into Monday morning.

All boundaries are strict: an instant equal to a boundary belongs to the
trading side, so 02:30:00 and 11:30:00 are still open.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Callable
from zoneinfo import ZoneInfo

SHANGHAI = ZoneInfo("Asia/Shanghai")

MONDAY = 0
SATURDAY = 5
SUNDAY = 6

NIGHT_SESSION_END = time(2, 30)
DAY_SESSION_START = time(9, 0)

Clock = Callable[[], datetime]


class MarketPhase(str, Enum):
    """Why the exchange is open or closed at a given instant."""

    OPEN = "open"
    WEEKEND = "weekend"
    PRE_OPEN = "pre_open"
    MIDDAY_BREAK = "midday_break"
    EVENING_BREAK = "evening_break"

    @property
    def closed(self) -> bool:
        return self is not MarketPhase.OPEN


@dataclass(frozen=True)
class TradingBreak:
    """A daily closed window, exclusive at both ends."""

    start: time
    end: time
    phase: MarketPhase

    def contains(self, moment: time) -> bool:
        return self.start < moment < self.end


DAILY_BREAKS: tuple[TradingBreak, ...] = (
    TradingBreak(time(11, 30), time(13, 30), MarketPhase.MIDDAY_BREAK),
    TradingBreak(time(15, 30), time(20, 0), MarketPhase.EVENING_BREAK),
)


def shanghai_now() -> datetime:
    """Wall-clock time in Asia/Shanghai."""

    return datetime.now(SHANGHAI)


def to_exchange_time(moment: datetime) -> datetime:
    """Express ``moment`` in exchange local time; naive values are taken as local already."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=SHANGHAI)
    return moment.astimezone(SHANGHAI)


class MarketClock:
    """Classifies instants as exchange open or closed.

    The clock is injected so callers can pin "now"; production code uses
    :func:`shanghai_now`.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        breaks: tuple[TradingBreak, ...] = DAILY_BREAKS,
    ) -> None:
        self._clock = clock or shanghai_now
        self._breaks = breaks

    def now(self) -> datetime:
        return to_exchange_time(self._clock())

    def phase(self, now: datetime | None = None) -> MarketPhase:
        local = to_exchange_time(now) if now is not None else self.now()
        weekday = local.weekday()
        moment = local.time()

        if weekday == SUNDAY:
            return MarketPhase.WEEKEND
        if weekday == SATURDAY:
            return MarketPhase.WEEKEND if moment > NIGHT_SESSION_END else MarketPhase.OPEN

        if weekday == MONDAY:
            if moment < DAY_SESSION_START:
                return MarketPhase.PRE_OPEN
        elif NIGHT_SESSION_END < moment < DAY_SESSION_START:
            return MarketPhase.PRE_OPEN

        for trading_break in self._breaks:
            if trading_break.contains(moment):
                return trading_break.phase
        return MarketPhase.OPEN

    def is_closed(self, now: datetime | None = None) -> bool:
        return self.phase(now).closed

    def is_open(self, now: datetime | None = None) -> bool:
        return not self.is_closed(now)


__all__ = [
    "DAILY_BREAKS",
    "SHANGHAI",
    "Clock",
    "MarketClock",
    "MarketPhase",
    "TradingBreak",
    "shanghai_now",
    "to_exchange_time",
]
