from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from booking_service.application.exceptions import StorageUnavailableError
from booking_service.application.ports.slot_store import SlotStorePort
from booking_service.domain.entities.booking import Booking
from booking_service.infrastructure.store.serialization import merge_records, split_records


class JsonSlotStore(SlotStorePort):
    def __init__(self, data_file: str = "./data/bookings.json") -> None:
        self._file_path = Path(data_file)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def read(self) -> list[Booking]:
        """Load the collection. A missing file is an empty collection, a corrupt one is an error."""
        with self._lock:
            bookings, _ = self._load_collection()
            return bookings

    def write(self, bookings: list[Booking]) -> None:
        """
        Save the collection atomically via a temp file and rename.
        Records in the file that could not be read are written back unchanged.
        """
        temp_path = self._file_path.with_suffix(".json.tmp")
        with self._lock:
            _, unreadable = self._load_collection()
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(merge_records(bookings, unreadable), f, indent=2, ensure_ascii=False)
                temp_path.replace(self._file_path)
            except OSError as e:
                self._logger.exception("Failed to write booking collection", extra={"error": str(e)})
                temp_path.unlink(missing_ok=True)
                raise StorageUnavailableError("Booking storage unavailable") from e

    def _load_collection(self) -> tuple[list[Booking], list[Any]]:
        """Load file contents. Caller must hold the lock."""
        if not self._file_path.exists():
            return [], []
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                return split_records(json.load(f))
        except (json.JSONDecodeError, OSError, ValueError) as e:
            self._logger.exception("Failed to read booking collection", extra={"error": str(e)})
            raise StorageUnavailableError("Booking storage unavailable") from e
