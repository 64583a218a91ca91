from abc import ABC, abstractmethod

from booking_service.domain.entities.notification import BookingNotification


class NotificationPort(ABC):
    @abstractmethod
    def send(self, notification: BookingNotification) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held connections. No-op by default."""
