from __future__ import annotations

import logging

from booking_service.application.ports.notifier import NotificationPort
from booking_service.domain.entities.notification import BookingNotification


class MockNotifier(NotificationPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[BookingNotification] = []

    def send(self, notification: BookingNotification) -> None:
        self.sent.append(notification)
        self._logger.info(
            "Mock booking notification",
            extra={
                "booking_id": notification.booking.id,
                "status": notification.booking.status.value,
                "operation": notification.event.value,
            },
        )
