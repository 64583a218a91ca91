from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable

from booking_service.application.exceptions import ValidationError
from booking_service.application.utils.booking_validation import parse_meeting_type, parse_status, parse_time
from booking_service.domain.entities.booking import Booking, Contact

logger = logging.getLogger(__name__)


def booking_to_record(booking: Booking) -> dict[str, Any]:
    """Serialize a Booking with the camelCase keys used by the stored collection."""
    return {
        "id": booking.id,
        "name": booking.contact.name,
        "email": booking.contact.email,
        "phone": booking.contact.phone,
        "date": booking.date.isoformat(),
        "time": booking.time.strftime("%H:%M"),
        "meetingType": booking.meeting_type.value,
        "notes": booking.notes,
        "status": booking.status.value,
        "createdAt": booking.created_at.isoformat(),
    }


def booking_from_record(data: dict[str, Any]) -> Booking:
    created_raw = str(data.get("createdAt") or "")
    return Booking(
        id=str(data["id"]),
        contact=Contact(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
        ),
        date=date.fromisoformat(str(data["date"])),
        time=parse_time(data.get("time")),
        meeting_type=parse_meeting_type(data.get("meetingType")),
        notes=str(data.get("notes") or ""),
        status=parse_status(data.get("status")),
        # "Z" suffix is not accepted by fromisoformat before 3.11
        created_at=datetime.fromisoformat(created_raw.replace("Z", "+00:00")),
    )


def bookings_to_records(bookings: Iterable[Booking]) -> list[dict[str, Any]]:
    return [booking_to_record(b) for b in bookings]


def split_records(records: Any) -> tuple[list[Booking], list[Any]]:
    """
    Deserialize a stored collection into (bookings, unreadable raw records).
    Unreadable records are kept verbatim so a later write can put them back.
    """
    if not isinstance(records, list):
        raise ValueError("Booking collection must be a list")

    bookings: list[Booking] = []
    unreadable: list[Any] = []
    for record in records:
        try:
            bookings.append(booking_from_record(record))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning("Skipping unreadable booking record", extra={"booking_id": record_id, "error": str(e)})
            unreadable.append(record)
    return bookings, unreadable


def merge_records(bookings: Iterable[Booking], unreadable: Iterable[Any]) -> list[Any]:
    """Serialize bookings and append the unreadable records that were loaded alongside them."""
    records: list[Any] = bookings_to_records(bookings)
    ids = {record["id"] for record in records}
    records.extend(r for r in unreadable if not isinstance(r, dict) or r.get("id") not in ids)
    return records
