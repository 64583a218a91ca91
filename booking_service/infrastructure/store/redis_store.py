from __future__ import annotations

import json
import logging
from typing import Any

from redis import Redis
from redis.exceptions import RedisError, WatchError

from booking_service.application.exceptions import StorageUnavailableError
from booking_service.application.ports.slot_store import Mutation, SlotStorePort, T
from booking_service.domain.entities.booking import Booking
from booking_service.infrastructure.store.serialization import merge_records, split_records


class RedisSlotStore(SlotStorePort):
    """
    Whole collection under one key. update() uses WATCH/MULTI so that two
    processes racing on the same key cannot both commit a stale collection.
    """

    def __init__(self, client: Redis, key: str = "callsal:bookings", max_attempts: int = 5) -> None:
        self._client = client
        self._key = key
        self._max_attempts = max_attempts
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_url(cls, url: str, key: str = "callsal:bookings") -> RedisSlotStore:
        client = Redis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client=client, key=key)

    def read(self) -> list[Booking]:
        try:
            raw = self._client.get(self._key)
        except RedisError as e:
            self._logger.exception("Failed to read booking collection", extra={"error": str(e)})
            raise StorageUnavailableError("Booking storage unavailable") from e
        bookings, _ = self._decode(raw)
        return bookings

    def write(self, bookings: list[Booking]) -> None:
        """Replace the collection, keeping stored records that could not be read. Use update() for atomicity."""
        try:
            _, unreadable = self._decode(self._client.get(self._key))
            self._client.set(self._key, self._encode(bookings, unreadable))
        except RedisError as e:
            self._logger.exception("Failed to write booking collection", extra={"error": str(e)})
            raise StorageUnavailableError("Booking storage unavailable") from e

    def update(self, mutate: Mutation[T]) -> T:
        try:
            with self._client.pipeline() as pipe:
                for _ in range(self._max_attempts):
                    try:
                        pipe.watch(self._key)
                        bookings, unreadable = self._decode(pipe.get(self._key))
                        updated, result = mutate(bookings)
                        if updated is None:
                            pipe.unwatch()
                            return result
                        pipe.multi()
                        pipe.set(self._key, self._encode(updated, unreadable))
                        pipe.execute()
                        return result
                    except WatchError:
                        self._logger.info("Booking collection changed during update, retrying")
                        continue
        except RedisError as e:
            self._logger.exception("Failed to update booking collection", extra={"error": str(e)})
            raise StorageUnavailableError("Booking storage unavailable") from e

        self._logger.error("Booking collection update kept conflicting", extra={"reason": "watch_retries_exhausted"})
        raise StorageUnavailableError("Booking storage busy")

    def _encode(self, bookings: list[Booking], unreadable: list[Any]) -> str:
        return json.dumps(merge_records(bookings, unreadable), ensure_ascii=False)

    def _decode(self, raw: str | bytes | None) -> tuple[list[Booking], list[Any]]:
        if raw is None:
            return [], []
        try:
            return split_records(json.loads(raw))
        except ValueError as e:
            self._logger.exception("Stored booking collection is corrupt", extra={"error": str(e)})
            raise StorageUnavailableError("Booking storage unavailable") from e
