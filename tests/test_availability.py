from __future__ import annotations

from datetime import datetime

import pytest

from booking_service.application.exceptions import ValidationError
from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.domain.entities.booking import Booking, BookingStatus, Contact, MeetingType
from booking_service.infrastructure.store.memory_store import MemorySlotStore


def _booking(booking_id: str, day: str, hour: str, status: BookingStatus, tz) -> Booking:
    return Booking(
        id=booking_id,
        contact=Contact(name="Client", email="client@example.com"),
        date=datetime.fromisoformat(day).date(),
        time=datetime.strptime(hour, "%H:%M").time(),
        meeting_type=MeetingType.remote,
        notes="",
        status=status,
        created_at=datetime(2026, 2, 1, tzinfo=tz),
    )


def test_cancelled_booking_contributes_no_busy_interval(clock, tz):
    store = MemorySlotStore(
        [
            _booking("b1", "2026-03-01", "09:00", BookingStatus.confirmed, tz),
            _booking("b2", "2026-03-01", "10:00", BookingStatus.cancelled, tz),
        ]
    )
    engine = BookingEngine(store=store, clock=clock, timezone=tz)

    intervals = engine.compute_availability(14)

    assert len(intervals) == 1
    assert intervals[0].start == datetime(2026, 3, 1, 9, 0, tzinfo=tz)
    assert intervals[0].end == datetime(2026, 3, 1, 10, 0, tzinfo=tz)


def test_window_bounds_are_inclusive_and_results_sorted(clock, tz):
    store = MemorySlotStore(
        [
            _booking("late", "2026-03-15", "00:00", BookingStatus.pending, tz),
            _booking("beyond", "2026-03-15", "01:00", BookingStatus.pending, tz),
            _booking("start", "2026-03-01", "00:00", BookingStatus.pending, tz),
            _booking("before", "2026-02-28", "23:00", BookingStatus.confirmed, tz),
        ]
    )
    engine = BookingEngine(store=store, clock=clock, timezone=tz)

    starts = [i.start for i in engine.compute_availability(14)]

    assert starts == [
        datetime(2026, 3, 1, 0, 0, tzinfo=tz),
        datetime(2026, 3, 15, 0, 0, tzinfo=tz),
    ]


def test_explicit_now_overrides_clock(clock, tz):
    store = MemorySlotStore([_booking("b1", "2026-04-01", "09:00", BookingStatus.pending, tz)])
    engine = BookingEngine(store=store, clock=clock, timezone=tz)

    assert engine.compute_availability(14) == []
    assert len(engine.compute_availability(14, now=datetime(2026, 3, 25))) == 1


def test_availability_never_writes(clock, tz):
    class ReadOnlyStore(MemorySlotStore):
        def write(self, bookings):
            raise AssertionError("availability must not write")

    store = ReadOnlyStore([_booking("b1", "2026-03-02", "09:00", BookingStatus.pending, tz)])
    engine = BookingEngine(store=store, clock=clock, timezone=tz)
    assert len(engine.compute_availability(7)) == 1


@pytest.mark.parametrize("horizon", [-1, 91])
def test_horizon_out_of_range_is_rejected(engine, horizon):
    with pytest.raises(ValidationError):
        engine.compute_availability(horizon)
