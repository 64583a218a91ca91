from __future__ import annotations

import logging

from booking_service.application.ports.notifier import NotificationPort
from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.domain.entities.notification import BookingEvent, BookingNotification


class NotifyBookingUseCase:
    def __init__(self, notifier: NotificationPort, engine: BookingEngine) -> None:
        self._notifier = notifier
        self._engine = engine
        self._logger = logging.getLogger(__name__)

    def execute(self, booking_id: str, event: BookingEvent) -> bool:
        """Send a notification for a finished state change. Returns True if it went out.

        Runs after the booking is persisted, so failures are logged and dropped here.
        """
        try:
            booking = self._engine.get_booking(booking_id)
            self._notifier.send(BookingNotification(event=event, booking=booking))
        except Exception as e:
            self._logger.exception(
                "Booking notification failed",
                extra={"booking_id": booking_id, "operation": event.value, "error": str(e)},
            )
            return False
        return True
