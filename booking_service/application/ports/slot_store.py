from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, TypeVar

from booking_service.domain.entities.booking import Booking

T = TypeVar("T")

# Receives the current collection and returns (collection to persist or None, result).
Mutation = Callable[[list[Booking]], tuple[list[Booking] | None, T]]


class SlotStorePort(ABC):
    @abstractmethod
    def read(self) -> list[Booking]:
        """Return the whole collection as one snapshot. Empty if never written."""
        raise NotImplementedError

    @abstractmethod
    def write(self, bookings: list[Booking]) -> None:
        """Replace the whole collection. Raises StorageUnavailableError on failure."""
        raise NotImplementedError

    def update(self, mutate: Mutation[T]) -> T:
        """
        Read-modify-write the collection.
        The default gives no cross-process atomicity; stores that can offer a
        compare-and-swap override this.
        """
        updated, result = mutate(self.read())
        if updated is not None:
            self.write(updated)
        return result
