from __future__ import annotations

import logging
import secrets
import threading
from datetime import datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from booking_service.application.exceptions import (
    AccessDeniedError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from booking_service.application.ports.clock import ClockPort
from booking_service.application.ports.slot_store import SlotStorePort
from booking_service.application.utils.booking_validation import parse_status
from booking_service.domain.entities.booking import (
    SLOT_LENGTH,
    Booking,
    BookingRequest,
    BookingStatus,
    BusyInterval,
)

# Operator may move between pending and confirmed freely; cancelled is terminal.
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.pending, BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.pending, BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.cancelled: frozenset({BookingStatus.cancelled}),
}


def new_booking_id() -> str:
    return f"booking_{secrets.token_hex(8)}"


class BookingEngine:
    """
    Slot admission and lifecycle rules over a SlotStorePort.

    The engine never caches the collection: every call re-reads the store.
    All mutating calls go through one lock so that a process has a single
    writer; the conflict scan and the write happen with no other I/O in between.
    Reads never take the lock.
    """

    def __init__(
        self,
        store: SlotStorePort,
        clock: ClockPort,
        timezone: ZoneInfo,
        max_horizon_days: int = 90,
        id_factory: Callable[[], str] = new_booking_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._timezone = timezone
        self._max_horizon_days = max_horizon_days
        self._id_factory = id_factory
        self._write_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def timezone(self) -> ZoneInfo:
        return self._timezone

    def propose_booking(self, request: BookingRequest) -> str:
        """Admit a new pending booking for a free slot. Returns the new id only."""
        now = self._clock.now()
        starts_at = datetime.combine(request.date, request.time, tzinfo=self._timezone)
        if starts_at < now:
            raise ValidationError("Requested slot is in the past")

        def admit(bookings: list[Booking]) -> tuple[list[Booking] | None, Booking]:
            if any(b.is_active and b.slot == request.slot for b in bookings):
                raise ConflictError("This time slot is already booked")

            taken_ids = {b.id for b in bookings}
            booking_id = self._id_factory()
            while booking_id in taken_ids:
                booking_id = self._id_factory()

            booking = Booking(
                id=booking_id,
                contact=request.contact,
                date=request.date,
                time=request.time,
                meeting_type=request.meeting_type,
                notes=request.notes,
                status=BookingStatus.pending,
                created_at=now,
            )
            return [*bookings, booking], booking

        with self._write_lock:
            try:
                booking = self._store.update(admit)
            except ConflictError:
                self._logger.info(
                    "Slot conflict",
                    extra={"operation": "propose", "reason": f"{request.date.isoformat()} {request.time:%H:%M}"},
                )
                raise

        self._logger.info(
            "Booking created",
            extra={"booking_id": booking.id, "status": booking.status.value, "operation": "propose"},
        )
        return booking.id

    def list_active_bookings(self, now: datetime | None = None) -> list[Booking]:
        current = self._localize(now) if now is not None else self._clock.now()
        active = [
            b for b in self._store.read()
            if b.is_active and b.starts_at(self._timezone) >= current
        ]
        return sorted(active, key=lambda b: b.slot)

    def get_booking(self, booking_id: str) -> Booking:
        for booking in self._store.read():
            if booking.id == booking_id:
                return booking
        raise NotFoundError("Booking not found")

    def set_status(self, booking_id: str, new_status: str | BookingStatus) -> Booking:
        status = parse_status(new_status)
        return self._change_status(booking_id, status, operation="set_status")

    def cancel_booking(self, booking_id: str, owner_email: str | None = None) -> Booking:
        """
        Soft-delete a booking, freeing its slot.
        When owner_email is given, only a booking with that contact e-mail may be cancelled.
        """
        return self._change_status(
            booking_id,
            BookingStatus.cancelled,
            operation="cancel",
            owner_email=owner_email,
        )

    def compute_availability(self, horizon_days: int, now: datetime | None = None) -> list[BusyInterval]:
        """One-hour busy intervals for held slots in [now, now + horizon_days]."""
        if horizon_days < 0 or horizon_days > self._max_horizon_days:
            raise ValidationError(f"horizonDays must be between 0 and {self._max_horizon_days}")

        start = self._localize(now) if now is not None else self._clock.now()
        end = start + timedelta(days=horizon_days)

        intervals: list[BusyInterval] = []
        for booking in self._store.read():
            if not booking.is_active:
                continue
            starts_at = booking.starts_at(self._timezone)
            if start <= starts_at <= end:
                intervals.append(BusyInterval(start=starts_at, end=starts_at + SLOT_LENGTH))
        return sorted(intervals, key=lambda i: i.start)

    def _change_status(
        self,
        booking_id: str,
        status: BookingStatus,
        operation: str,
        owner_email: str | None = None,
    ) -> Booking:
        def apply(bookings: list[Booking]) -> tuple[list[Booking] | None, Booking]:
            for index, booking in enumerate(bookings):
                if booking.id != booking_id:
                    continue
                if owner_email is not None and booking.contact.email.lower() != owner_email.lower():
                    raise AccessDeniedError("Booking belongs to another client", authenticated=True)
                if status not in ALLOWED_TRANSITIONS[booking.status]:
                    raise InvalidTransitionError(
                        f"Cannot change status from {booking.status.value} to {status.value}"
                    )
                if booking.status == status:
                    return None, booking
                updated = booking.with_status(status)
                return [*bookings[:index], updated, *bookings[index + 1 :]], updated
            raise NotFoundError("Booking not found")

        with self._write_lock:
            booking = self._store.update(apply)

        self._logger.info(
            "Booking status set",
            extra={"booking_id": booking.id, "status": booking.status.value, "operation": operation},
        )
        return booking

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self._timezone)
        return value.astimezone(self._timezone)
