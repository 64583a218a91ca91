from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.application.utils.booking_validation import build_booking_request
from booking_service.domain.entities.booking import BookingRequest
from booking_service.infrastructure.clock.fixed_clock import FixedClock
from booking_service.infrastructure.store.memory_store import MemorySlotStore


TZ = ZoneInfo("America/Edmonton")


@pytest.fixture
def tz() -> ZoneInfo:
    return TZ


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 1, 0, 0), TZ)


@pytest.fixture
def store() -> MemorySlotStore:
    return MemorySlotStore()


@pytest.fixture
def engine(store: MemorySlotStore, clock: FixedClock) -> BookingEngine:
    return BookingEngine(store=store, clock=clock, timezone=TZ)


@pytest.fixture
def make_request():
    def _make(
        date_text: str = "2026-03-01",
        time_text: str = "09:00",
        email: str = "ada@example.com",
        name: str = "Ada Lovelace",
        **kwargs,
    ) -> BookingRequest:
        return build_booking_request(name=name, email=email, date_text=date_text, time_text=time_text, **kwargs)

    return _make
