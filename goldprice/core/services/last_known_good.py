"""Process-lifetime store of the most recent valid price values."""

from __future__ import annotations

from goldprice.core.models import LastKnownGood


class LastKnownGoodCache:
    """Holds one :class:`LastKnownGood` value.

    A stored value never replaces a positive field with zero or a negative number.
    """

    def __init__(self, initial: LastKnownGood | None = None) -> None:
        self._value = initial or LastKnownGood()

    @property
    def value(self) -> LastKnownGood:
        return self._value

    def store(self, value: LastKnownGood) -> LastKnownGood:
        current = self._value
        self._value = LastKnownGood(
            international=value.international if value.international > 0 else current.international,
            domestic=value.domestic if value.domestic > 0 else current.domestic,
            rate=value.rate if value.rate > 0 else current.rate,
        )
        return self._value


__all__ = ["LastKnownGoodCache"]
