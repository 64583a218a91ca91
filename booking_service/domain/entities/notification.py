from dataclasses import dataclass
from enum import Enum

from booking_service.domain.entities.booking import Booking


class BookingEvent(str, Enum):
    created = "created"
    status_changed = "status_changed"


@dataclass(frozen=True)
class BookingNotification:
    event: BookingEvent
    booking: Booking
