from __future__ import annotations

import logging

import httpx

from booking_service.application.ports.notifier import NotificationPort
from booking_service.domain.entities.notification import BookingNotification
from booking_service.infrastructure.store.serialization import booking_to_record


class WebhookNotifier(NotificationPort):
    """Posts booking events to a mail relay or automation webhook."""

    def __init__(self, url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def send(self, notification: BookingNotification) -> None:
        payload = {
            "event": notification.event.value,
            "booking": booking_to_record(notification.booking),
        }
        resp = self._client.post(self._url, json=payload)
        if resp.status_code >= 400:
            self._logger.error(
                "Booking notification rejected",
                extra={
                    "booking_id": notification.booking.id,
                    "operation": notification.event.value,
                    "reason": f"HTTP {resp.status_code}",
                },
            )
            resp.raise_for_status()
        self._logger.info(
            "Booking notification sent",
            extra={"booking_id": notification.booking.id, "operation": notification.event.value},
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
