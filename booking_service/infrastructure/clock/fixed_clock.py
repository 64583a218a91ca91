from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from booking_service.application.ports.clock import ClockPort


class FixedClock(ClockPort):
    """Clock frozen at a given instant, for tests and local replays."""

    def __init__(self, current: datetime, timezone: ZoneInfo) -> None:
        self._timezone = timezone
        self._current = current if current.tzinfo else current.replace(tzinfo=timezone)

    def now(self) -> datetime:
        return self._current.astimezone(self._timezone)

    def set(self, current: datetime) -> None:
        self._current = current if current.tzinfo else current.replace(tzinfo=self._timezone)

    def advance(self, delta: timedelta) -> None:
        self._current = self._current + delta
