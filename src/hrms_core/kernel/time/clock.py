"""Kernel time – the clock services and the cache read."""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: the one source of "now".

    The cache compares ``timestamp()`` against entry deadlines; services
    stamp rows with ``now()`` and key daily reads by ``today()``. All three
    are UTC.
    """

    def now(self) -> datetime: ...
    def today(self) -> date: ...
    def timestamp(self) -> float: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)

    def today(self) -> date:
        return self.now().date()

    def timestamp(self) -> float:
        return self.now().timestamp()


class FrozenClock:
    """Clock that only moves when told to; used to step over TTL deadlines."""

    def __init__(self, at: datetime) -> None:
        self.set(at)

    def set(self, at: datetime) -> None:
        if at.tzinfo is None:
            raise ValueError("FrozenClock needs a timezone-aware datetime")
        self._at = at.astimezone(UTC)

    def now(self) -> datetime:
        return self._at

    def today(self) -> date:
        return self._at.date()

    def timestamp(self) -> float:
        return self._at.timestamp()

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by ``timedelta(**kwargs)`` and return the new instant."""
        self._at += timedelta(**kwargs)
        return self._at


__all__ = ["Clock", "FrozenClock", "SystemClock"]
