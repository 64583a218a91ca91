from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum


SLOT_LENGTH = timedelta(hours=1)


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class MeetingType(str, Enum):
    remote = "remote"
    in_person = "in-person"
    phone = "phone"


@dataclass(frozen=True)
class Contact:
    name: str
    email: str
    phone: str = ""


@dataclass(frozen=True)
class Booking:
    id: str
    contact: Contact
    date: date
    time: time
    meeting_type: MeetingType
    notes: str
    status: BookingStatus
    created_at: datetime

    @property
    def slot(self) -> tuple[date, time]:
        return (self.date, self.time)

    @property
    def is_active(self) -> bool:
        """Pending and confirmed bookings hold their slot; cancelled ones do not."""
        return self.status != BookingStatus.cancelled

    def starts_at(self, tz: tzinfo) -> datetime:
        return datetime.combine(self.date, self.time, tzinfo=tz)

    def with_status(self, status: BookingStatus) -> Booking:
        return replace(self, status=status)


@dataclass(frozen=True)
class BookingRequest:
    """A propose request that already passed boundary validation."""

    contact: Contact
    date: date
    time: time
    meeting_type: MeetingType = MeetingType.remote
    notes: str = ""

    @property
    def slot(self) -> tuple[date, time]:
        return (self.date, self.time)


@dataclass(frozen=True)
class BusyInterval:
    start: datetime
    end: datetime
