from __future__ import annotations

import threading

from booking_service.application.ports.slot_store import SlotStorePort
from booking_service.domain.entities.booking import Booking


class MemorySlotStore(SlotStorePort):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])
        self._lock = threading.Lock()

    def read(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    def write(self, bookings: list[Booking]) -> None:
        with self._lock:
            self._bookings = list(bookings)
